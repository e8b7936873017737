import os
import subprocess
import sys

import yaml

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SCRIPT = os.path.join(ROOT, "run_analysis.py")


def run_cli(*args):
    proc = subprocess.run([sys.executable, SCRIPT, *args], capture_output=True, text=True, cwd=ROOT)
    return proc, proc.stdout + proc.stderr


def test_cli_preset_report():
    proc, output = run_cli("--preset", "20m-dipole")
    assert proc.returncode == 0
    assert "Feed impedance:" in output
    assert "Center-Fed" in output
    assert "SWR:" in output


def test_cli_list_presets():
    proc, output = run_cli("--list-presets")
    assert proc.returncode == 0
    assert "80m-efhw" in output
    assert "meshtastic-915" in output


def test_cli_design_and_sweep(tmp_path):
    design_file = tmp_path / "design.yml"
    with open(design_file, "w") as f:
        yaml.dump({"design": {"frequency": "7.1 MHz", "length": 20.0, "feed_point": 33,
                              "wire_diameter": 2.0, "balun_ratio": "4:1"}}, f)
    sweep_file = tmp_path / "sweep.yml"
    with open(sweep_file, "w") as f:
        yaml.dump({"sweep": [{"param": "frequency", "range": [6.5, 7.5], "points": 5}]}, f)
    csv_file = tmp_path / "out.csv"

    proc, output = run_cli("--design", str(design_file), "--sweep", str(sweep_file),
                           "--dump", str(csv_file))
    assert proc.returncode == 0
    assert "Off-Center-Fed" in output
    assert "Sweep completed" in output
    lines = csv_file.read_text().strip().splitlines()
    assert lines[0].startswith("frequency,")
    assert len(lines) == 6


def test_cli_invalid_design(tmp_path):
    design_file = tmp_path / "bad.yml"
    design_file.write_text("frequency: 14.2\n")
    proc, output = run_cli("--design", str(design_file))
    assert proc.returncode == 1
    assert "Missing design fields" in output


def test_cli_requires_a_source():
    proc, _ = run_cli()
    assert proc.returncode == 2


def test_cli_log_file(tmp_path):
    log_file = tmp_path / "run.log"
    sweep_file = tmp_path / "sweep.yml"
    with open(sweep_file, "w") as f:
        yaml.dump({"sweep": [{"param": "length", "values": [10.0, 10.6]}]}, f)
    proc, _ = run_cli("--preset", "20m-dipole", "--sweep", str(sweep_file), "--log-file", str(log_file))
    assert proc.returncode == 0
    assert "Sweep of 2 points finished" in log_file.read_text()


def test_cli_rejects_out_of_range_sweep(tmp_path):
    sweep_file = tmp_path / "sweep.yml"
    with open(sweep_file, "w") as f:
        yaml.dump({"sweep": [{"param": "frequency", "values": [-14.2, 50000.0]}]}, f)
    proc, output = run_cli("--preset", "20m-dipole", "--sweep", str(sweep_file))
    assert proc.returncode == 1
    assert "outside" in output
