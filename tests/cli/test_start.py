import json
import os
from unittest.mock import patch

import httpx
from click.testing import CliRunner
from pytest_httpx import HTTPXMock

from uipath_trigger._cli import cli
from uipath_trigger._services import JobsService


def _release() -> dict:
    return {"Key": "release-key", "Name": "Sanity", "ProcessKey": "SanityPackage"}


def _job(state: str) -> dict:
    return {"Id": 100, "Key": "job-key", "State": state, "Info": f"Job {state}"}


class TestStart:
    def test_successful_run(
        self, runner: CliRunner, httpx_mock: HTTPXMock, tenant_url: str
    ):
        httpx_mock.add_response(json={"value": [_release()]})
        httpx_mock.add_response(json={"value": [_job("Pending")]})
        httpx_mock.add_response(json=_job("Successful"))

        result = runner.invoke(
            cli,
            [
                "start",
                "Sanity",
                "--url",
                tenant_url,
                "--token",
                "token",
                "--poll-interval",
                "0",
                "--input",
                '{"env": "qa"}',
                "--priority",
                "high",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "All jobs finished successfully" in result.output
        start_info = json.loads(httpx_mock.get_requests()[1].content)["startInfo"]
        assert start_info["JobPriority"] == "High"
        assert json.loads(start_info["InputArguments"]) == {"env": "qa"}

    def test_faulted_job_exits_with_1(
        self, runner: CliRunner, httpx_mock: HTTPXMock, tenant_url: str
    ):
        httpx_mock.add_response(json={"value": [_release()]})
        httpx_mock.add_response(json={"value": [_job("Pending")]})
        httpx_mock.add_response(json=_job("Faulted"))

        result = runner.invoke(
            cli,
            ["start", "Sanity", "--url", tenant_url, "--token", "t", "--poll-interval", "0"],
        )

        assert result.exit_code == 1
        assert "1 job(s) failed" in result.output

    def test_tolerated_failure_exits_with_0(
        self, runner: CliRunner, httpx_mock: HTTPXMock, tenant_url: str
    ):
        httpx_mock.add_response(json={"value": [_release()]})
        httpx_mock.add_response(json={"value": [_job("Pending")]})
        httpx_mock.add_response(json=_job("Stopped"))

        result = runner.invoke(
            cli,
            [
                "start",
                "Sanity",
                "--url",
                tenant_url,
                "--token",
                "t",
                "--poll-interval",
                "0",
                "--no-fail-on-failure",
            ],
        )

        assert result.exit_code == 0, result.output

    def test_writes_summary(
        self, runner: CliRunner, httpx_mock: HTTPXMock, tenant_url: str
    ):
        httpx_mock.add_response(json={"value": [_release()]})
        httpx_mock.add_response(json={"value": [_job("Pending")]})

        with runner.isolated_filesystem():
            result = runner.invoke(
                cli,
                [
                    "start",
                    "Sanity",
                    "--url",
                    tenant_url,
                    "--token",
                    "t",
                    "--no-wait",
                    "--output-file",
                    "summary.json",
                ],
            )

            assert result.exit_code == 0, result.output
            with open("summary.json") as f:
                summary = json.load(f)

        assert summary["outcome"] == "submitted"
        assert summary["exitCode"] == 0
        assert summary["strategy"] == "ModernJobsCount"
        assert summary["jobs"] == [
            {"id": 100, "key": "job-key", "state": "Pending", "info": "Job Pending"}
        ]

    def test_dry_run(self, runner: CliRunner, httpx_mock: HTTPXMock, tenant_url: str):
        httpx_mock.add_response(json={"value": [_release()]})

        result = runner.invoke(
            cli, ["start", "Sanity", "--url", tenant_url, "--token", "t", "--dry-run"]
        )

        assert result.exit_code == 0, result.output
        assert "process 'Sanity' -> release-key (exact)" in result.output
        assert len(httpx_mock.get_requests()) == 1

    def test_input_file(
        self, runner: CliRunner, httpx_mock: HTTPXMock, tenant_url: str
    ):
        httpx_mock.add_response(json={"value": [_release()]})
        httpx_mock.add_response(json={"value": [_job("Pending")]})

        with runner.isolated_filesystem():
            with open("input.json", "w") as f:
                json.dump({"count": 3}, f)

            result = runner.invoke(
                cli,
                [
                    "start",
                    "Sanity",
                    "--url",
                    tenant_url,
                    "--token",
                    "t",
                    "--no-wait",
                    "--input-file",
                    os.path.join(os.getcwd(), "input.json"),
                ],
            )

        assert result.exit_code == 0, result.output
        start_info = json.loads(httpx_mock.get_requests()[1].content)["startInfo"]
        assert json.loads(start_info["InputArguments"]) == {"count": 3}

    def test_invalid_input_is_a_usage_error(self, runner: CliRunner, tenant_url: str):
        result = runner.invoke(
            cli,
            ["start", "Sanity", "--url", tenant_url, "--token", "t", "--input", "[1, 2]"],
        )

        assert result.exit_code == 2
        assert "JSON object" in result.output

    def test_missing_url(self, runner: CliRunner):
        result = runner.invoke(cli, ["start", "Sanity", "--token", "t"])

        assert result.exit_code == 1
        assert "Orchestrator URL missing" in result.output

    def test_missing_credentials(self, runner: CliRunner, tenant_url: str):
        result = runner.invoke(cli, ["start", "Sanity", "--url", tenant_url])

        assert result.exit_code == 1
        assert "Authentication required" in result.output

    def test_submission_failure_exits_with_1(
        self, runner: CliRunner, httpx_mock: HTTPXMock, tenant_url: str
    ):
        httpx_mock.add_response(json={"value": [_release()]})
        httpx_mock.add_response(status_code=403, json={"message": "forbidden"})

        result = runner.invoke(
            cli, ["start", "Sanity", "--url", tenant_url, "--token", "t"]
        )

        assert result.exit_code == 1
        assert "Failed to start 'Sanity'" in result.output

    def test_unreachable_orchestrator_exits_with_1(
        self, runner: CliRunner, httpx_mock: HTTPXMock, tenant_url: str
    ):
        for _ in range(JobsService.MAX_RETRIES + 1):
            httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        with patch("time.sleep"):
            result = runner.invoke(
                cli, ["start", "Sanity", "--url", tenant_url, "--token", "t"]
            )

        assert result.exit_code == 1
        assert "Could not resolve process 'Sanity'" in result.output
        assert "connection refused" in result.output

    def test_start_jobs_timeout_is_not_resent(
        self, runner: CliRunner, httpx_mock: HTTPXMock, tenant_url: str
    ):
        httpx_mock.add_response(json={"value": [_release()]})
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"))

        with patch("time.sleep"):
            result = runner.invoke(
                cli, ["start", "Sanity", "--url", tenant_url, "--token", "t"]
            )

        assert result.exit_code == 1
        assert "The jobs may have been created" in result.output
        assert len(httpx_mock.get_requests()) == 2
