from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from loguru import logger

from .config import Config
from .models import RegionQuery, SchemeResponse


def positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def setup_logging(level: str) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> | {message}",
    )


def print_response(resp: SchemeResponse, cfg: Config, limit: int, as_json: bool) -> None:
    if as_json:
        payload = resp.to_dict()
        payload["items"] = payload["items"][:limit]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    print(f"myScheme: {resp.source_url}")
    if resp.note:
        print(resp.note)
    if resp.error:
        print(f"  ({resp.error})")
    items = resp.limited(limit)
    if not items:
        print("No schemes found via scraping right now. You can browse directly on myScheme above.")
        return
    for i, item in enumerate(items, start=1):
        print(f"{i:>2}. {item.title}")
        print(f"    {item.absolute_href(cfg.site_base_url)}")
        if item.description:
            print(f"    {item.description}")


def cmd_serve(cfg: Config, args: argparse.Namespace) -> int:
    import uvicorn  # lazy import

    uvicorn.run("schemefinder.api:app", host=args.host or cfg.api_host, port=args.port or cfg.api_port)
    return 0


def cmd_schemes(cfg: Config, args: argparse.Namespace) -> int:
    from .api import build_pipeline  # lazy import

    state = (args.state or "").strip()
    if not state:
        print("Missing state parameter", file=sys.stderr)
        return 2
    pipeline = build_pipeline(cfg)
    try:
        resp = pipeline.retrieve(RegionQuery(state=state, district=(args.district or "").strip() or None))
    finally:
        pipeline.client.close()
    print_response(resp, cfg, args.limit or cfg.max_items, args.json)
    return 0


def cmd_locate(cfg: Config, args: argparse.Namespace) -> int:
    from .api import build_geocoder, build_pipeline  # lazy import
    from .geocoder import GeocodeError

    geocoder = build_geocoder(cfg)
    try:
        location = geocoder.resolve(args.lat, args.lon)
    except GeocodeError as e:
        print(str(e), file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Reverse geocode error")
        print(f"Could not resolve state from your location: {e}", file=sys.stderr)
        return 1
    finally:
        geocoder.client.close()

    if not location.state:
        print("Could not resolve state from your location.", file=sys.stderr)
        return 1
    print(f"State: {location.state}" + (f" | District: {location.district}" if location.district else ""))

    pipeline = build_pipeline(cfg)
    try:
        resp = pipeline.retrieve(RegionQuery(state=location.state, district=location.district))
    finally:
        pipeline.client.close()
    print_response(resp, cfg, args.limit or cfg.max_items, args.json)
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="myscheme-locator",
        description="Find government schemes on myScheme for an Indian state/district",
    )
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("serve", help="Run the HTTP API")
    s.add_argument("--host", type=str, default=None, help="Bind address (default: API_HOST)")
    s.add_argument("--port", type=int, default=None, help="Port (default: API_PORT)")
    s.set_defaults(func=cmd_serve)

    s = sub.add_parser("schemes", help="List schemes for a state and optional district")
    s.add_argument("--state", type=str, required=True)
    s.add_argument("--district", type=str, default=None)
    s.add_argument("--limit", type=positive_int, default=None, help="Max items to show (default: MAX_ITEMS)")
    s.add_argument("--json", action="store_true", help="Print the raw JSON response")
    s.set_defaults(func=cmd_schemes)

    s = sub.add_parser("locate", help="Reverse-geocode coordinates, then list schemes")
    s.add_argument("--lat", type=float, required=True)
    s.add_argument("--lon", type=float, required=True)
    s.add_argument("--limit", type=positive_int, default=None, help="Max items to show (default: MAX_ITEMS)")
    s.add_argument("--json", action="store_true", help="Print the raw JSON response")
    s.set_defaults(func=cmd_locate)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    cfg = Config.from_env()
    setup_logging(cfg.log_level)
    return args.func(cfg, args)


if __name__ == "__main__":
    sys.exit(main())
