"""
Minimal smoke tests for the lift-planner CLI.

Tests basic functionality:
- App runs and shows help
- Goals validate with the right exit codes
- Plans generate (tables and JSON)
- Session, readiness, velocity and 1RM commands respond
"""

import json

import pytest
from typer.testing import CliRunner

from lift_planner.cli.main import app

runner = CliRunner()

GOAL = ["--exercise", "Bench Press", "--current-max", "225", "--target-max", "250"]
SQUAT = ["--exercise", "Squat", "--current-max", "315", "--target-max", "350", "--weeks", "12"]
GOOD_DAY = ["--sleep", "8", "--stress", "3", "--energy", "8", "--soreness", "2", "--motivation", "8"]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the template config at a file that does not exist."""
    monkeypatch.setenv("LIFT_PLANNER_CONFIG", str(tmp_path / "none.yaml"))
    return tmp_path


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "plan" in result.output
        assert "readiness" in result.output

    def test_validate_realistic(self):
        result = runner.invoke(app, ["validate", *GOAL])
        assert result.exit_code == 0
        assert "realistic" in result.output

    @pytest.mark.parametrize("value", ["nan", "inf"])
    def test_validate_non_finite_max(self, value):
        result = runner.invoke(app, ["validate", "-e", "Squat", "-c", value, "-t", "300"])
        assert result.exit_code == 1
        assert "finite" in result.output

    def test_validate_unrealistic_json(self):
        result = runner.invoke(app, ["validate", *GOAL[:4], "--target-max", "275", "--weeks", "12", "--json"])
        assert result.exit_code == 2

        data = json.loads(result.stdout)
        assert data["realistic"] is False
        assert data["suggestion"] == 250
        assert data["projected_max"] == 250

    def test_plan_table(self):
        result = runner.invoke(app, ["plan", *GOAL, "--start-date", "2026-01-05"])
        assert result.exit_code == 0
        assert "Bench Press" in result.output
        assert "2026-04-27" in result.output

    def test_plan_json(self):
        result = runner.invoke(
            app, ["plan", *GOAL, "--method", "block", "--days", "4", "--start-date", "2026-01-05", "--json"]
        )
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["start_date"] == "2026-01-05"
        assert len(data["weeks"]) == 16
        assert data["weeks"][-1]["type"] == "test"
        assert len(data["weeks"][0]["sessions"]) == 4

    def test_plan_refuses_unrealistic_goal(self):
        result = runner.invoke(app, ["plan", *GOAL[:4], "--target-max", "300"])
        assert result.exit_code == 1
        assert "--force" in result.output

    def test_plan_force(self):
        result = runner.invoke(app, ["plan", *GOAL[:4], "--target-max", "300", "--force", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["projected_max"] == 259

    def test_plan_template(self):
        result = runner.invoke(app, ["plan", *GOAL, "--template", "general_strength", "--json"])
        assert result.exit_code == 0

        weeks = json.loads(result.stdout)["weeks"]
        assert len(weeks[0]["sessions"]) == 4
        assert weeks[0]["sessions"][0]["notes"].startswith("Heavy day")

    def test_plan_unknown_template(self):
        result = runner.invoke(app, ["plan", *GOAL, "--template", "crossfit"])
        assert result.exit_code == 1

    def test_plan_goal_file(self, isolated_config):
        path = isolated_config / "goal.json"
        path.write_text(json.dumps({"exercise": "Deadlift", "currentMax": 405, "targetMax": 430, "timeframe": 8}))

        result = runner.invoke(app, ["plan", "--goal-file", str(path), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["exercise"] == "Deadlift"
        assert len(data["weeks"]) == 8

    def test_plan_goal_file_is_directory(self, isolated_config):
        result = runner.invoke(app, ["plan", "--goal-file", str(isolated_config)])
        assert result.exit_code == 1
        assert "cannot read" in result.output

    def test_plan_missing_options(self):
        result = runner.invoke(app, ["plan", "--exercise", "Squat"])
        assert result.exit_code == 1
        assert "required" in result.output

    def test_plan_invalid_value(self):
        result = runner.invoke(app, ["plan", *GOAL, "--weeks", "60"])
        assert result.exit_code == 1
        assert "timeframe" in result.output

    def test_plan_bad_start_date(self):
        result = runner.invoke(app, ["plan", *GOAL, "--start-date", "05/01/2026"])
        assert result.exit_code == 1

    def test_loads_json(self):
        result = runner.invoke(app, ["loads", "--current-max", "200", "--intensity", "0.8", "--json"])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["working_weight"] == 160
        assert len(data["warmup_sets"]) == 4
        assert data["working_volume"] == 2400

    def test_loads_table(self):
        result = runner.invoke(app, ["loads", "--current-max", "200", "--intensity", "0.8"])
        assert result.exit_code == 0
        assert "160" in result.output

    def test_templates_lists_user_additions(self, isolated_config, monkeypatch):
        path = isolated_config / "templates.yaml"
        path.write_text("templates:\n  peaking:\n    name: Peaking\n    method: block\n    training_days: 2\n")
        monkeypatch.setenv("LIFT_PLANNER_CONFIG", str(path))

        result = runner.invoke(app, ["templates", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert set(data) == {"powerlifting", "general_strength", "bodybuilding", "peaking"}

    def test_session_json(self):
        result = runner.invoke(app, ["session", *SQUAT, "--json"])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["type"] == "hypertrophy"
        assert data["phase"] == "accumulation"

    def test_session_table(self):
        result = runner.invoke(app, ["session", *SQUAT, "--session", "2"])
        assert result.exit_code == 0
        assert "power" in result.output
        assert "ACCUMULATION PHASE" in result.output

    def test_session_vbt_with_readiness(self):
        result = runner.invoke(
            app, ["session", *SQUAT, "--model", "vbt_autoregulated", "--vbt", *GOOD_DAY, "--json"]
        )
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["type"] == "vbt_autoregulated"
        assert "vbt_protocol" in data
        assert "VELOCITY-BASED TRAINING" in data["coaching_notes"]

    def test_session_partial_readiness(self):
        result = runner.invoke(app, ["session", *SQUAT, "--sleep", "8"])
        assert result.exit_code == 1
        assert "readiness" in result.output

    def test_session_bad_week(self):
        result = runner.invoke(app, ["session", *SQUAT, "--week", "0"])
        assert result.exit_code == 1

    def test_session_params_file(self, isolated_config):
        path = isolated_config / "params.json"
        path.write_text(json.dumps({"exercise": "Squat", "currentMax": 315, "targetMax": 350, "timeframe": 12}))

        result = runner.invoke(app, ["session", "--params-file", str(path), "--session", "3", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["type"] == "strength"

    def test_readiness_json(self):
        result = runner.invoke(app, ["readiness", *GOOD_DAY, "--json"])
        assert result.exit_code == 0

        data = json.loads(result.stdout)
        assert data["score"] == pytest.approx(8.2)
        assert data["recommendation"] == "proceed"
        assert data["adjustment"] == 1.1

    def test_readiness_out_of_range(self):
        result = runner.invoke(app, ["readiness", *GOOD_DAY[:-1], "11"])
        assert result.exit_code == 1

    def test_velocity(self):
        result = runner.invoke(app, ["velocity", "--adaptation", "strength", "--rpe", "9", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"optimal_velocity_loss": 20, "rpe_velocity_loss": 30}

    def test_velocity_needs_an_option(self):
        result = runner.invoke(app, ["velocity"])
        assert result.exit_code == 1

    def test_velocity_unknown_adaptation(self):
        result = runner.invoke(app, ["velocity", "--adaptation", "speed"])
        assert result.exit_code == 1

    def test_one_rep_max(self):
        result = runner.invoke(app, ["one-rep-max", "--weight", "200", "--reps", "5", "--rpe", "6", "--json"])
        assert result.exit_code == 0
        # 200 × 36 / 32 = 225; RPE 6 → ×1.05 = 210
        assert json.loads(result.stdout) == {"one_rep_max": 225.0, "next_weight": 210.0}

    def test_one_rep_max_rejects_reps(self):
        result = runner.invoke(app, ["one-rep-max", "--weight", "200", "--reps", "25"])
        assert result.exit_code == 1

    def test_one_rep_max_rejects_nan_weight(self):
        result = runner.invoke(app, ["one-rep-max", "--weight", "nan", "--reps", "5"])
        assert result.exit_code == 1
        assert "positive number" in result.output

    def test_verbose_flag(self):
        result = runner.invoke(app, ["--verbose", "readiness", *GOOD_DAY])
        assert result.exit_code == 0
        assert "proceed" in result.output
