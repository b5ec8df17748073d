from __future__ import annotations

import importlib.util
import json
from pathlib import Path
import tempfile
import unittest
import xml.etree.ElementTree as ET

import main as cli


EXAMPLE_DIR = Path(__file__).resolve().parents[1] / "examples" / "plots" / "timeseries_svg"


def _load_example():
    spec = importlib.util.spec_from_file_location("timeseries_svg_app_main", EXAMPLE_DIR / "app_main.py")
    assert spec is not None and spec.loader is not None
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


class LoaderTests(unittest.TestCase):
    def test_readings_are_mapped_to_time_and_value(self) -> None:
        records = cli.load_readings(EXAMPLE_DIR / "timeseries.json")
        self.assertEqual(len(records), 13)
        self.assertEqual(records[0]["time"], 1709251200000.0)
        self.assertEqual(records[0]["value"], 4.2)
        self.assertNotEqual(records[5]["value"], records[5]["value"])

    def test_food_values_are_scaled(self) -> None:
        records = cli.load_food_series(EXAMPLE_DIR / "food.json", scale=10.0)
        self.assertEqual(records[0], {"year": 2019, "value": 410.0, "food": "bread"})


class RenderCommandTests(unittest.TestCase):
    def test_render_single_series(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "chart.svg"
            code = cli.main(["render", str(EXAMPLE_DIR / "timeseries.json"), "--out", str(out)])
            self.assertEqual(code, 0)
            root = ET.parse(out).getroot()
            self.assertEqual(root.get("height"), "500")
            paths = root.findall("{http://www.w3.org/2000/svg}path")
            self.assertEqual(len(paths), 1)
            self.assertEqual(paths[0].get("stroke"), "steelblue")

    def test_render_multi_series(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "food.svg"
            code = cli.main(
                ["render", str(EXAMPLE_DIR / "food.json"), "--out", str(out), "--kind", "multi", "--curve", "step"]
            )
            self.assertEqual(code, 0)
            root = ET.parse(out).getroot()
            labels = [t.text for t in root.findall("{http://www.w3.org/2000/svg}text")]
            self.assertEqual(labels, ["bread", "rice", "beans"])

    def test_render_reports_unusable_data(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "empty.json"
            src.write_text(json.dumps([{"valuedatetime": "2024-01-01T00:00:00Z", "datavalue": None}]), encoding="utf-8")
            out = Path(tmp) / "chart.svg"
            code = cli.main(["render", str(src), "--out", str(out)])
            self.assertEqual(code, 2)
            self.assertFalse(out.exists())


class ExampleAppTests(unittest.TestCase):
    def test_temperature_chart_breaks_at_missing_reading(self) -> None:
        mod = _load_example()
        svg = mod.build_temperature_chart()
        (path,) = [child for child in svg if child.tag == "path"]
        self.assertEqual(path.get("d", "").count("M"), 2)

    def test_food_chart_labels_every_series(self) -> None:
        mod = _load_example()
        svg = mod.build_food_chart()
        self.assertEqual([child.text for child in svg if child.tag == "text"], ["bread", "rice", "beans"])
        self.assertEqual(len([child for child in svg if child.tag == "path"]), 3)


if __name__ == "__main__":
    unittest.main()
