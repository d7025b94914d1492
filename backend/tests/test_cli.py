"""
Tests for the customs-validate command line runner
"""

import json

from customs_sim.cli import main


class TestSamples:
    """Running the bundled sample declarations"""

    def test_list(self, capsys):
        assert main(["--list"]) == 0

        out = capsys.readouterr().out
        assert "basic: Clean Apparel Export" in out
        assert "inconsistent" in out

    def test_clean_sample_exits_zero(self, capsys):
        assert main(["--sample", "basic"]) == 0

        out = capsys.readouterr().out
        assert "Validating: Clean Apparel Export" in out
        assert "Customs Ready: YES" in out
        assert "Checks Passed: 26/26" in out

    def test_blocking_sample_exits_one(self, capsys):
        assert main(["--sample", "weight_mismatch"]) == 1

        out = capsys.readouterr().out
        assert "grossWeight: 毛重不能小于净重" in out

    def test_unknown_sample(self, capsys):
        assert main(["--sample", "nope"]) == 2
        assert "Unknown sample: nope" in capsys.readouterr().err

    def test_all_samples(self, capsys):
        assert main([]) == 1

        out = capsys.readouterr().out
        assert out.count("VALIDATION REPORT") == 8


class TestAutoFix:
    """--fix applies every auto-fix and re-validates"""

    def test_fix_makes_total_mismatch_ready(self, capsys):
        assert main(["--sample", "total_mismatch"]) == 1
        capsys.readouterr()

        assert main(["--sample", "total_mismatch", "--fix"]) == 0
        assert "Applied 1 auto-fix(es)" in capsys.readouterr().out

    def test_fix_json_includes_corrected_declaration(self, capsys):
        assert main(["--sample", "short_hs_code", "--fix", "--json"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["overallStatus"] == "pass"
        assert output["declaration"]["goods"][0]["goodsCode"] == "0000123456789"


class TestFiles:
    """Declarations read from JSON files"""

    def test_file(self, tmp_path, clean_data, capsys):
        path = tmp_path / "declaration.json"
        path.write_text(json.dumps(clean_data, ensure_ascii=False), encoding="utf-8")

        assert main(["--file", str(path), "--json"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["customsReady"] is True
        assert "declaration" not in output

    def test_missing_file(self, tmp_path, capsys):
        assert main(["--file", str(tmp_path / "absent.json")]) == 2
        assert "Could not read declaration" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        assert main(["-f", str(path)]) == 2

    def test_malformed_declaration(self, tmp_path, clean_data, capsys):
        clean_data["netWeight"] = "light"
        path = tmp_path / "declaration.json"
        path.write_text(json.dumps(clean_data, ensure_ascii=False), encoding="utf-8")

        assert main(["--file", str(path)]) == 2
        assert "Invalid declaration" in capsys.readouterr().err
