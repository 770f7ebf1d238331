"""Tests for the gantt command line."""

import json

import pytest

from ganttline.cli import main

TASKS = {
    "data": [
        {"id": 1, "name": "A", "status": "completed", "created_at": "2024-01-05",
         "due_date": "2024-01-20", "project": {"id": 7, "name": "X"}},
        {"id": 2, "name": "B", "status": "pending", "created_at": "2024-02-01",
         "due_date": "2024-02-15", "project": {"id": 7, "name": "X"}},
        {"id": 3, "name": "Docs, part 1", "status": "blocked", "created_at": "2024-03-01",
         "due_date": "2024-03-10", "project": None},
    ],
    "meta": {"current_page": 1, "last_page": 1},
}


@pytest.fixture
def tasks_file(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps(TASKS))
    return path


class TestShow:
    """Tests for gantt show."""

    def test_plain_output(self, tasks_file, capsys):
        assert main(["show", str(tasks_file), "--no-color", "--width", "20"]) == 0
        out = capsys.readouterr().out
        assert "Range:    Jan 1, 2024 - Mar 31, 2024" in out
        assert "Tasks:    3" in out
        assert "▶ X (2) 50%" in out
        assert "▶ No Project (1) 0%" in out
        assert "\033[" not in out

    def test_expand(self, tasks_file, capsys):
        main(["show", str(tasks_file), "--no-color", "--expand", "X"])
        out = capsys.readouterr().out
        assert "▼ X" in out
        assert "    A" in out
        assert "    Docs, part 1" not in out

    def test_search_reports_matches(self, tasks_file, capsys):
        main(["show", str(tasks_file), "--no-color", "--search", "b"])
        out = capsys.readouterr().out
        assert "Showing:  1 matching task(s)" in out
        assert "No Project (" not in out

    def test_color_output(self, tasks_file, capsys):
        main(["show", str(tasks_file), "--expand-all"])
        out = capsys.readouterr().out
        assert "\033[38;2;" in out


class TestExport:
    """Tests for gantt export."""

    def test_stdout(self, tasks_file, capsys):
        assert main(["export", str(tasks_file)]) == 0
        out = capsys.readouterr().out
        assert out == (
            "X,A,2024-01-05,2024-01-20,completed\n"
            "X,B,2024-02-01,2024-02-15,pending\n"
            'No Project,"Docs, part 1",2024-03-01,2024-03-10,blocked\n'
        )

    def test_header_and_filter(self, tasks_file, capsys):
        main(["export", str(tasks_file), "--header", "--project", "X"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "project,task,start,end,status"
        assert len(lines) == 3

    def test_to_file(self, tasks_file, tmp_path, capsys):
        output = tmp_path / "out" / "view.csv"
        assert main(["export", str(tasks_file), "--output", str(output), "--search", "a"]) == 0
        assert output.read_text() == (
            "X,A,2024-01-05,2024-01-20,completed\n"
            'No Project,"Docs, part 1",2024-03-01,2024-03-10,blocked\n'
        )
        assert "Exported 2 task(s) from 2 project(s)" in capsys.readouterr().out


class TestProjects:
    """Tests for gantt projects."""

    def test_lists_groups(self, tasks_file, capsys):
        assert main(["projects", str(tasks_file)]) == 0
        out = capsys.readouterr().out
        assert "X" in out
        assert "1/2" in out
        assert "2 project(s), 1/3 task(s) completed (33%)" in out

    def test_no_match(self, tasks_file, capsys):
        main(["projects", str(tasks_file), "--search", "zzz"])
        assert "No projects found." in capsys.readouterr().out


class TestErrors:
    """Invalid input exits with code 2."""

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["show", str(tmp_path / "missing.json")])
        assert exc.value.code == 2
        assert "ERROR: Could not load tasks" in capsys.readouterr().out

    def test_schema_violation(self, tmp_path, capsys):
        path = tmp_path / "tasks.json"
        path.write_text(json.dumps([{"id": 1}]))
        with pytest.raises(SystemExit) as exc:
            main(["export", str(path)])
        assert exc.value.code == 2


class TestConfig:
    """Tests for --config."""

    def test_no_project_label(self, tasks_file, tmp_path, capsys):
        config = tmp_path / "gantt.yaml"
        config.write_text("no_project_label: Unassigned\n")
        main(["--config", str(config), "projects", str(tasks_file)])
        out = capsys.readouterr().out
        assert "Unassigned" in out
        assert "No Project" not in out

    def test_env_var(self, tasks_file, tmp_path, monkeypatch, capsys):
        config = tmp_path / "gantt.yaml"
        config.write_text("no_project_label: Backlog\n")
        monkeypatch.setenv("GANTT_CONFIG", str(config))
        main(["export", str(tasks_file)])
        assert "Backlog,\"Docs, part 1\"" in capsys.readouterr().out
