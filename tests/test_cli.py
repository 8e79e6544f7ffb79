import io
import json
import sys
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent))

from schemefinder import cli
from schemefinder.config import Config
from schemefinder.models import ResolvedLocation, SchemeItem, SchemeResponse


def make_config(**overrides):
    values = dict(
        site_base_url="https://www.myscheme.gov.in",
        request_timeout=5.0,
        user_agent="test",
        geocoder_url="https://geo.example/reverse",
        geocoder_user_agent="test",
        max_items=2,
        curated_data_path=None,
        api_host="127.0.0.1",
        api_port=8000,
        log_level="ERROR",
    )
    values.update(overrides)
    return Config(**values)


class FakePipeline:
    def __init__(self, response):
        self.response = response
        self.regions = []
        self.client = self

    def retrieve(self, region):
        self.regions.append(region)
        return self.response

    def close(self):
        pass


RESPONSE = SchemeResponse(
    items=[
        SchemeItem(title="A", href="/schemes/a", description="First scheme"),
        SchemeItem(title="B", href="https://example.org/b"),
        SchemeItem(title="C", href="/schemes/c"),
    ],
    source_url="https://www.myscheme.gov.in/search?q=Odisha",
)


class TestCli(unittest.TestCase):
    def run_cli(self, argv, pipeline, geocoder=None):
        out = io.StringIO()
        with patch.object(cli.Config, "from_env", return_value=make_config()), patch(
            "schemefinder.api.build_pipeline", return_value=pipeline
        ), patch("schemefinder.api.build_geocoder", return_value=geocoder), redirect_stdout(out):
            code = cli.main(argv)
        return code, out.getvalue()

    def test_schemes_limits_and_absolutizes(self):
        pipeline = FakePipeline(RESPONSE)
        code, out = self.run_cli(["schemes", "--state", "Odisha"], pipeline)
        self.assertEqual(code, 0)
        self.assertIn("https://www.myscheme.gov.in/schemes/a", out)
        self.assertIn("https://example.org/b", out)
        self.assertNotIn("/schemes/c", out)
        self.assertEqual(pipeline.regions[0].state, "Odisha")
        self.assertIsNone(pipeline.regions[0].district)

    def test_schemes_json(self):
        pipeline = FakePipeline(RESPONSE)
        code, out = self.run_cli(["schemes", "--state", "Odisha", "--limit", "1", "--json"], pipeline)
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(len(payload["items"]), 1)
        self.assertEqual(payload["sourceUrl"], RESPONSE.source_url)

    def test_locate_chains_geocoder_and_pipeline(self):
        geocoder = FakePipeline(None)
        geocoder.resolve = lambda lat, lon: ResolvedLocation(state="Odisha", district="Khordha")
        pipeline = FakePipeline(RESPONSE)
        code, out = self.run_cli(["locate", "--lat", "20.29", "--lon", "85.82"], pipeline, geocoder)
        self.assertEqual(code, 0)
        self.assertIn("State: Odisha", out)
        self.assertEqual(pipeline.regions[0].district, "Khordha")

    def test_locate_without_state_fails(self):
        geocoder = FakePipeline(None)
        geocoder.resolve = lambda lat, lon: ResolvedLocation(state=None, district=None)
        pipeline = FakePipeline(RESPONSE)
        code, _ = self.run_cli(["locate", "--lat", "0", "--lon", "0"], pipeline, geocoder)
        self.assertEqual(code, 1)
        self.assertEqual(pipeline.regions, [])

    def test_limit_below_one_rejected(self):
        pipeline = FakePipeline(RESPONSE)
        for value in ("0", "-1"):
            with self.assertRaises(SystemExit) as ctx, redirect_stderr(io.StringIO()):
                self.run_cli(["schemes", "--state", "Odisha", "--limit", value], pipeline)
            self.assertEqual(ctx.exception.code, 2)
        self.assertEqual(pipeline.regions, [])


if __name__ == "__main__":
    unittest.main()
