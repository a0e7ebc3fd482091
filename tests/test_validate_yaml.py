#!/usr/bin/env python3
"""Tests for validate_yaml schema validation."""

from pathlib import Path

from validate_yaml import load_schema, main, validate_fleet_file

SAMPLE_FLEET = Path(__file__).parent.parent / "fleets" / "fleet.yaml"

VALID_FLEET = """
programs:
  - id: 1
    name: Standard
    vehicles:
      - vehicleId: 1
        addedAt: 2024-01-01
vehicles:
  - id: 1
    mileage: 24800
tasks:
  - id: 1
    name: Engine oil and filter change
schedules:
  - id: 1
    programId: 1
    name: Quarterly Oil Service
    timeIntervalValue: 90
    timeIntervalUnit: day
    timeBufferValue: 7
    timeBufferUnit: day
    firstServiceDate: 2024-01-08
    taskIds: [1]
"""


def write_fleet(tmp_path, schedule_yaml):
    path = tmp_path / "fleet.yaml"
    path.write_text(f"""
programs: []
vehicles: []
tasks: []
schedules:
{schedule_yaml}
""")
    return path


class TestLoadSchema:
    """Tests for load_schema function."""

    def test_returns_dict(self):
        schema = load_schema()
        assert isinstance(schema, dict)

    def test_has_expected_structure(self):
        properties = load_schema()["properties"]
        for section in ("programs", "vehicles", "tasks", "schedules"):
            assert section in properties


class TestValidateFleetFile:
    """Tests for validate_fleet_file function."""

    def test_valid_returns_no_errors(self, tmp_path):
        """Unquoted YAML dates are accepted."""
        path = tmp_path / "valid.yaml"
        path.write_text(VALID_FLEET)
        assert validate_fleet_file(path, load_schema()) == []

    def test_sample_fleet_is_valid(self):
        assert validate_fleet_file(SAMPLE_FLEET, load_schema()) == []

    def test_schedule_without_interval(self, tmp_path):
        path = write_fleet(tmp_path, """
  - id: 1
    programId: 1
    name: Nothing recurs
""")
        errors = validate_fleet_file(path, load_schema())
        assert errors
        assert any("Schema validation" in e for e in errors)

    def test_unit_without_value(self, tmp_path):
        path = write_fleet(tmp_path, """
  - id: 1
    programId: 1
    name: Half configured
    mileageInterval: 5000
    timeIntervalUnit: day
""")
        assert validate_fleet_file(path, load_schema())

    def test_buffer_without_axis(self, tmp_path):
        path = write_fleet(tmp_path, """
  - id: 1
    programId: 1
    name: Buffer only
    timeIntervalValue: 30
    timeIntervalUnit: day
    mileageBuffer: 500
""")
        assert validate_fleet_file(path, load_schema())

    def test_zero_interval(self, tmp_path):
        path = write_fleet(tmp_path, """
  - id: 1
    programId: 1
    name: Zero
    mileageInterval: 0
""")
        errors = validate_fleet_file(path, load_schema())
        assert any("at path" in e for e in errors)

    def test_unknown_unit(self, tmp_path):
        path = write_fleet(tmp_path, """
  - id: 1
    programId: 1
    name: Monthly
    timeIntervalValue: 1
    timeIntervalUnit: month
""")
        assert validate_fleet_file(path, load_schema())

    def test_null_added_at(self, tmp_path):
        path = tmp_path / "fleet.yaml"
        path.write_text("""
programs:
  - id: 1
    name: Standard
    vehicles:
      - vehicleId: 1
        addedAt: null
      - vehicleId: 2
        addedAt: 2024-01-01
vehicles: []
tasks: []
schedules: []
""")
        errors = validate_fleet_file(path, load_schema())
        assert errors
        assert any("programs.0.vehicles.0.addedAt" in e for e in errors)

    def test_invalid_yaml_returns_parse_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("programs: [unclosed\n")
        errors = validate_fleet_file(path, load_schema())
        assert any("YAML" in e for e in errors)

    def test_nonexistent_file_returns_errors(self, tmp_path):
        errors = validate_fleet_file(tmp_path / "missing.yaml", load_schema())
        assert errors
        assert errors[0].startswith("Error:")


class TestMain:
    """Tests for the validate_yaml entry point."""

    def test_valid_file(self, tmp_path, capsys):
        path = tmp_path / "valid.yaml"
        path.write_text(VALID_FLEET)
        assert main([str(path)]) == 0
        assert "OK: valid.yaml" in capsys.readouterr().out

    def test_invalid_file(self, tmp_path, capsys):
        path = write_fleet(tmp_path, "  - {id: 1, programId: 1, name: Empty}")
        assert main([str(path)]) == 1
        assert "FAIL: fleet.yaml" in capsys.readouterr().out

    def test_missing_fleets_dir(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        assert main([]) == 1
        assert "fleets directory not found" in capsys.readouterr().out
