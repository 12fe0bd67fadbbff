import json

from scripts import merge_lists


def test_cli_merges_files_to_stdout(write_json, capsys):
    path_a = write_json("a.json", [{"num": 1, "title": "a", "created": 10}])
    path_b = write_json(
        "b.json",
        [{"num": 1, "title": "a2", "deleted": 20}, {"num": 2, "title": "b", "created": 5}],
    )

    exit_code = merge_lists.main([str(path_a), str(path_b)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert captured.err == ""
    assert json.loads(captured.out) == [
        {"num": 2, "title": "b", "created": 5},
        {"num": 1, "title": "a2", "deleted": 20},
    ]
    assert captured.out.startswith("[\n  {")


def test_cli_tie_keeps_record_from_first_file(write_json, capsys):
    path_a = write_json("a.json", [{"num": 3, "title": "first", "created": 7}])
    path_b = write_json("b.json", [{"num": 3, "title": "second", "created": 7}])

    assert merge_lists.main([str(path_a), str(path_b)]) == 0
    assert json.loads(capsys.readouterr().out) == [{"num": 3, "title": "first", "created": 7}]


def test_cli_requires_two_files(write_json, capsys):
    path_a = write_json("a.json", [])

    exit_code = merge_lists.main([str(path_a)])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert captured.err.splitlines()[0] == "Usage: mergelists <filename1> <filename2> ..."
    assert "expected at least 2 input files, got 1" in captured.err


def test_cli_min_files_can_be_lowered(write_json, capsys):
    path_a = write_json("a.json", [])

    assert merge_lists.main(["--min-files", "1", str(path_a)]) == 0
    assert json.loads(capsys.readouterr().out) == []


def test_cli_load_failure_names_file_and_prints_nothing(write_json, capsys):
    good = write_json("good.json", [{"num": 1, "title": "a", "created": 1}])
    bad = write_json("bad.json", [{"num": 1, "title": "a"}])

    exit_code = merge_lists.main([str(good), str(bad)])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert f"`{bad}`" in captured.err
    assert "fields are absent" in captured.err


def test_cli_verbose_logs_to_stderr_only(write_json, capsys):
    path_a = write_json("a.json", [{"num": 1, "title": "a", "created": 1}])
    path_b = write_json("b.json", [{"num": 1, "title": "a", "created": 2}])

    assert merge_lists.main(["-v", str(path_a), str(path_b)]) == 0

    captured = capsys.readouterr()
    assert "Merge summary" in captured.err
    assert json.loads(captured.out) == [{"num": 1, "title": "a", "created": 2}]
