import json

from branchtalk.cli import main


def test_compile_writes_json(script_file, capsys):
    assert main(["compile", str(script_file)]) == 0

    output = script_file.with_suffix(".json")
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["nodes"][0]["kind"] == "start"
    assert "Compiled" in capsys.readouterr().out


def test_compile_to_explicit_path(script_file, tmp_path):
    target = tmp_path / "graph.json"
    assert main(["compile", str(script_file), "-o", str(target)]) == 0
    assert target.exists()


def test_play_prints_steps(script_file, capsys):
    assert main(["play", str(script_file), "--choose", "1"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "type: option | name: pick | content: Go left; Go right | choices: Go left ; Go right",
        "type: person_say | name: A | content: Right | choices: ",
        "type: end | name:  | content:  | choices: ",
    ]


def test_play_compiled_graph(script_file, capsys):
    main(["compile", str(script_file)])
    capsys.readouterr()

    assert main(["play", str(script_file.with_suffix(".json"))]) == 0
    assert "content: Left" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):
    assert main(["play", str(tmp_path / "nope.dlg")]) == 1
    assert "not found" in capsys.readouterr().err


def test_malformed_script(tmp_path, capsys):
    path = tmp_path / "bad.dlg"
    path.write_text("<option>pick\n<a>A\n", encoding="utf-8")

    assert main(["compile", str(path)]) == 1
    assert "never closed" in capsys.readouterr().err
