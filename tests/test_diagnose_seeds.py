import importlib.util
import json
import os

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _load_script():
    path = os.path.join(ROOT, "scripts", "diagnose_seeds.py")
    spec = importlib.util.spec_from_file_location("diagnose_seeds", path)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def test_diagnose_reports_clean_seeds(capsys):
    mod = _load_script()
    assert mod.main(["42", "1337"]) == 0
    results = json.loads(capsys.readouterr().out)["results"]
    assert [r["seed"] for r in results] == [42, 1337]
    assert all(r["ok"] and r["attempts"] >= 1 for r in results)
