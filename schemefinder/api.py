"""HTTP API: coordinates to region, region to schemes."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, FastAPI, Query
from fastapi.responses import JSONResponse
from loguru import logger

from .config import Config
from .curated import CuratedDataset, load_curated
from .geocoder import GeocodeError, ReverseGeocoder
from .http_client import HttpClient
from .models import RegionQuery
from .parser import Parser
from .pipeline import SchemePipeline

app = FastAPI(title="myScheme Locator API", version="1.0.0")

_config = Config.from_env()
# Static for the life of the process; a bad file falls back to the built-in list.
_curated = load_curated(_config.curated_data_path, _config.site_base_url)


def build_pipeline(cfg: Config, curated: Optional[CuratedDataset] = None) -> SchemePipeline:
    if curated is None:
        curated = load_curated(cfg.curated_data_path, cfg.site_base_url)
    client = HttpClient(cfg.headers, timeout=cfg.request_timeout)
    return SchemePipeline(
        client,
        Parser(),
        site_base_url=cfg.site_base_url,
        curated=(curated,),
    )


def build_geocoder(cfg: Config) -> ReverseGeocoder:
    client = HttpClient(cfg.geocoder_headers, timeout=cfg.request_timeout)
    return ReverseGeocoder(client, cfg.geocoder_url)


def get_pipeline():
    pipeline = build_pipeline(_config, _curated)
    try:
        yield pipeline
    finally:
        pipeline.client.close()


def get_geocoder():
    geocoder = build_geocoder(_config)
    try:
        yield geocoder
    finally:
        geocoder.client.close()


def _region_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"state": None, "district": None, "error": message},
    )


@app.get("/region")
def get_region(
    lat: Optional[str] = Query(default=None),
    lon: Optional[str] = Query(default=None),
    geocoder: ReverseGeocoder = Depends(get_geocoder),
):
    if not lat or not lon:
        return _region_error(400, "Missing lat/lon")
    try:
        lat_f, lon_f = float(lat), float(lon)
    except ValueError:
        return _region_error(400, "Invalid lat/lon")

    try:
        return geocoder.resolve(lat_f, lon_f).to_dict()
    except GeocodeError as e:
        return _region_error(502, str(e))
    except Exception as e:
        logger.exception("Reverse geocode error")
        return _region_error(500, str(e) or "Reverse geocode error")


@app.get("/schemes")
def get_schemes(
    state: Optional[str] = Query(default=None),
    district: Optional[str] = Query(default=None),
    pipeline: SchemePipeline = Depends(get_pipeline),
):
    if not state or not state.strip():
        return JSONResponse(status_code=400, content={"items": [], "note": "Missing state parameter"})

    region = RegionQuery(state=state.strip(), district=(district or "").strip() or None)
    # Degradation is reported in the body; the status stays 200.
    return pipeline.retrieve(region).to_dict()
