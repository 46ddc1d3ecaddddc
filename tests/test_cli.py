import json
from unittest.mock import patch

from click.testing import CliRunner

from zodios.cli import main

API = "sample_api:api"


def _write(tmp_path, name: str, content: str):
    path = tmp_path / name
    path.write_text(content)
    return path


class TestCliCheckRequest:
    def test_transforms_parameters(self, tmp_path):
        body = _write(tmp_path, "body.json", '"123"')
        runner = CliRunner()
        result = runner.invoke(main, [
            "check-request", API,
            "--method", "post", "--url", "/transform",
            "--data", str(body),
            "--query", "sampleQueryParam=456",
            "--header", "sampleHeader=789",
        ])

        assert result.exit_code == 0, result.output
        view = json.loads(result.output)
        assert view["data"] == "123_transformed"
        assert view["queries"] == {"sampleQueryParam": "456_transformed"}
        assert view["headers"] == {"sampleHeader": "789_transformed"}

    def test_no_transform_flag(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            "check-request", API,
            "--method", "post", "--url", "/transform",
            "--query", "sampleQueryParam=456",
            "--no-transform",
        ])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["queries"] == {"sampleQueryParam": "456"}

    def test_send_defaults(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            "check-request", API, "--method", "get", "--url", "/defaults", "--send-defaults",
        ])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["queries"] == {"sampleQueryParam": "defaultQueryParam"}

    def test_path_parameter(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            "check-request", API, "--method", "get", "--url", "/users/{id}", "--param", "id=7",
        ])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["params"] == {"id": 7}

    def test_config_file(self, tmp_path):
        config = _write(tmp_path, "plugin.yaml", "transform: false\n")
        runner = CliRunner()
        result = runner.invoke(main, [
            "check-request", API,
            "--method", "post", "--url", "/transform",
            "--query", "sampleQueryParam=456",
            "-c", str(config),
        ])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["queries"] == {"sampleQueryParam": "456"}

    def test_unknown_endpoint(self):
        runner = CliRunner()
        result = runner.invoke(main, ["check-request", API, "--method", "GET", "--url", "/notExisting"])

        assert result.exit_code == 1
        assert "No endpoint found for get /notExisting" in result.output

    def test_invalid_parameter(self, tmp_path):
        body = _write(tmp_path, "body.json", "123")
        runner = CliRunner()
        result = runner.invoke(main, [
            "check-request", API, "--method", "post", "--url", "/parse", "--data", str(body),
        ])

        assert result.exit_code == 1
        assert "Zodios: Invalid Body parameter 'body'" in result.output

    def test_malformed_pair(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            "check-request", API, "--method", "post", "--url", "/parse", "--query", "oops",
        ])

        assert result.exit_code == 2
        assert "Expected name=value" in result.output

    def test_bad_api_reference(self):
        runner = CliRunner()
        result = runner.invoke(main, ["check-request", "sample_api", "--method", "get", "--url", "/"])

        assert result.exit_code == 2
        assert "API_REF" in result.output


class TestCliCheckResponse:
    def test_valid_response(self, tmp_path):
        body = _write(tmp_path, "body.json", '{"first": "123", "second": 111}')
        runner = CliRunner()
        result = runner.invoke(main, [
            "check-response", API, "--method", "post", "--url", "/transform", "--body", str(body),
        ])

        assert result.exit_code == 0, result.output
        view = json.loads(result.output)
        assert view["data"] == {"first": "123_transformed", "second": 234}
        assert view["status"] == 200

    def test_invalid_response(self, tmp_path):
        body = _write(tmp_path, "body.yaml", "first: 123\nsecond: 111\n")
        runner = CliRunner()
        result = runner.invoke(main, [
            "check-response", API,
            "--method", "post", "--url", "/parse",
            "--body", str(body), "--status-text", "OK",
        ])

        assert result.exit_code == 1
        assert "Zodios: Invalid response from endpoint 'post /parse'" in result.output
        assert "status: 200 OK" in result.output
        assert '"invalid_type"' in result.output

    def test_non_json_content_type_skips_validation(self, tmp_path):
        body = _write(tmp_path, "body.yaml", "first: 123\n")
        runner = CliRunner()
        result = runner.invoke(main, [
            "check-response", API,
            "--method", "post", "--url", "/parse",
            "--body", str(body), "--content-type", "text/plain",
        ])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"] == {"first": 123}

    @patch("zodios.cli.logging.basicConfig")
    def test_verbose_flag(self, mock_basic_config, tmp_path):
        body = _write(tmp_path, "body.json", '{"first": "1", "second": 2}')
        runner = CliRunner()
        result = runner.invoke(main, [
            "-v", "check-response", API, "--method", "post", "--url", "/parse", "--body", str(body),
        ])

        assert result.exit_code == 0, result.output
        mock_basic_config.assert_called_once()
