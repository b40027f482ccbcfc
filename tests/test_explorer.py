import json
import unittest
import warnings
from unittest.mock import patch

import pandas as pd

from datadigest import explorer as explorer_mod
from datadigest.errors import NoScopeFramesWarning
from datadigest.explorer import ExplorerConfig, ExplorerWidget, assemble_codebook, build_payload, explorer


class TestAssembleCodebook(unittest.TestCase):
    def test_order_and_length_preserved(self) -> None:
        df = pd.DataFrame({"a": [1, None], "b": ["x", "y"]})
        pairs = [("second", df), ("first", df.head(1)), ("second", df)]
        entries = assemble_codebook(pairs)
        self.assertEqual([e.file for e in entries], ["second", "first", "second"])
        self.assertEqual([e.rows for e in entries], [2, 1, 2])
        self.assertEqual(entries[0].json_rows, '[{"a":"1","b":"x"},{"a":"","b":"y"}]')

    def test_empty(self) -> None:
        self.assertEqual(assemble_codebook([]), [])

    def test_json_field_matches_counts(self) -> None:
        df = pd.DataFrame({"speed": [4, 7, None], "dist": [2.0, 4.0, 10.0], "note": [None, "ok", None]})
        entry = assemble_codebook([("cars", df)])[0]
        decoded = json.loads(entry.json_rows)
        self.assertEqual(len(decoded), entry.rows)
        for row in decoded:
            self.assertEqual(len(row), entry.columns)
            self.assertTrue(all(isinstance(v, str) for v in row.values()))


class TestPayload(unittest.TestCase):
    def test_wire_shape(self) -> None:
        entries = assemble_codebook([("A", pd.DataFrame({"a": [1]}))])
        wire = build_payload(entries, add_env=True).to_wire()
        self.assertEqual(list(wire.keys()), ["rParams", "settings"])
        self.assertEqual(wire["rParams"], {"addEnv": True})
        self.assertEqual(wire["settings"]["meta"], {})
        self.assertEqual(wire["settings"]["labelCol"], "File")
        self.assertEqual(
            wire["settings"]["files"],
            [{"File": "A", "Rows": 1, "Columns": 1, "json": '[{"a":"1"}]'}],
        )

    def test_empty_payload_is_valid(self) -> None:
        wire = build_payload([], add_env=False).to_wire()
        self.assertEqual(wire["settings"]["files"], [])


class TestExplorer(unittest.TestCase):
    def test_explicit_data_without_scan(self) -> None:
        widget = explorer({"Cars": pd.DataFrame({"speed": [4, 7]})}, add_env=False, scope={})
        self.assertIsInstance(widget, ExplorerWidget)
        self.assertEqual(widget.name, "explorer")
        self.assertEqual(widget.package, "datadigest")
        self.assertEqual(widget.sizing_policy, {"viewer_fill": False})
        files = widget.x.settings.files
        self.assertEqual([(f.file, f.rows, f.columns) for f in files], [("Cars", 2, 1)])

    def test_demo_keeps_raw_add_env(self) -> None:
        widget = explorer(demo=True, add_env=True, scope={})
        wire = json.loads(widget.to_json())
        self.assertEqual(wire["rParams"]["addEnv"], True)
        self.assertEqual(
            [f["File"] for f in wire["settings"]["files"]],
            ["airquality", "BOD", "cars", "iris", "mtcars", "PlantGrowth", "women"],
        )
        mtcars = next(f for f in wire["settings"]["files"] if f["File"] == "mtcars")
        self.assertEqual((mtcars["Rows"], mtcars["Columns"]), (32, 12))
        first = json.loads(mtcars["json"])[0]
        self.assertEqual(first["model"], "Mazda RX4")
        self.assertEqual(first["mpg"], "21")

    def test_config_defaults_apply(self) -> None:
        scope = {"df": pd.DataFrame({"a": [1]})}
        widget = explorer(scope=scope, config=ExplorerConfig(add_env=True, label_col="Dataset"))
        self.assertEqual([f.file for f in widget.x.settings.files], ["df"])
        self.assertEqual(widget.x.settings.label_col, "Dataset")

    def test_default_scope_is_main_namespace(self) -> None:
        with patch.object(explorer_mod, "resolve_sources", return_value=[]) as resolver:
            explorer(add_env=False)
        resolver.assert_called_once_with(None, add_env=False, demo=False, scope=None, stacklevel=3)

    def test_to_html_embeds_payload(self) -> None:
        df = pd.DataFrame({"text": ["</script><b>"]})
        widget = explorer({"T": df}, add_env=False, scope={})
        page = widget.to_html(element_id="cb", script_src="explorer.js")
        self.assertIn('<div id="cb"', page)
        self.assertIn('<script src="explorer.js"></script>', page)
        self.assertIn('data-for="cb"', page)
        self.assertNotIn("</script><b>", page)
        self.assertIn("width:100%;height:400px;", page)

    def test_config_size_reaches_page(self) -> None:
        config = ExplorerConfig(add_env=False, width="800px", height="300px")
        widget = explorer([], scope={}, config=config)
        self.assertEqual((widget.width, widget.height), ("800px", "300px"))
        self.assertIn("width:800px;height:300px;", widget.to_html())

    def test_scope_warning_points_at_caller(self) -> None:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            explorer(add_env=True, scope={"n": 1})
        self.assertEqual(len(caught), 1)
        self.assertIs(caught[0].category, NoScopeFramesWarning)
        self.assertEqual(caught[0].filename, __file__)

    def test_to_dict(self) -> None:
        widget = explorer([], add_env=False, scope={})
        out = widget.to_dict()
        self.assertEqual(out["name"], "explorer")
        self.assertEqual(out["x"]["settings"]["files"], [])
        self.assertEqual(out["sizingPolicy"], {"viewer_fill": False})


if __name__ == "__main__":
    unittest.main()
