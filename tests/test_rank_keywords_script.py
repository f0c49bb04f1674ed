"""Tests for scripts/rank_keywords.py."""

import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "rank_keywords.py"


@pytest.fixture
def script():
    spec = importlib.util.spec_from_file_location("rank_keywords_script", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def articles_file(tmp_path):
    path = tmp_path / "articles.json"
    path.write_text(json.dumps([
        {"id": "a1", "title": "Plant roots", "text": "Roots bend toward gravity."},
        {"id": "a2", "title": "Bone", "text": "Bone loss in orbit."},
    ]), encoding="utf-8")
    return path


class TestRankKeywordsScript:
    def test_prints_top_terms(self, script, articles_file, capsys):
        script.main([str(articles_file), "--top", "2"])

        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 2
        assert "bone" in lines[0]

    def test_writes_graph(self, script, articles_file, tmp_path):
        out = tmp_path / "graph.json"

        script.main([str(articles_file), "--top", "0", "--select", "Gravity, bone", "--graph-out", str(out)])

        graph = json.loads(out.read_text(encoding="utf-8"))
        uids = {n["uid"] for n in graph["nodes"]}
        assert uids == {"keyword:gravity", "keyword:bone", "article:a1", "article:a2"}

    def test_missing_file(self, script, tmp_path):
        with pytest.raises(SystemExit):
            script.main([str(tmp_path / "nope.json")])
