from __future__ import annotations

import pytest

from src.wallos_supervisor.environment_validator import validate_environment, validate_port
from src.wallos_supervisor.errors import PreconditionError


def _resolve_all(name):
    return f"/usr/bin/{name}"


def test_validate_environment_passes_when_everything_present(make_settings):
    validate_environment(make_settings(), which=_resolve_all)


def test_missing_port_is_reported_first(make_settings):
    settings = make_settings(port=None)

    with pytest.raises(PreconditionError, match="NGINX_PORT environment variable is required"):
        validate_environment(settings, which=lambda name: None)


@pytest.mark.parametrize("port", [0, 70000])
def test_out_of_range_port_rejected(make_settings, port):
    with pytest.raises(PreconditionError, match="between 1 and 65535"):
        validate_port(make_settings(port=port))


def test_missing_crontab_rejected(make_settings, tmp_path):
    settings = make_settings(crontab_path=tmp_path / "absent-crontab")

    with pytest.raises(PreconditionError, match="crontab configuration"):
        validate_environment(settings, which=_resolve_all)


def test_missing_application_files_rejected(make_settings, tmp_path):
    settings = make_settings(app_dir=tmp_path / "no-app")

    with pytest.raises(PreconditionError, match="application files"):
        validate_environment(settings, which=_resolve_all)


def test_missing_executable_named_in_error(make_settings):
    def which(name):
        return None if name == "supercronic" else _resolve_all(name)

    with pytest.raises(PreconditionError, match="supercronic executable not found"):
        validate_environment(make_settings(), which=which)


def test_precondition_error_exit_code_is_non_zero(make_settings):
    with pytest.raises(PreconditionError) as excinfo:
        validate_environment(make_settings(port=None), which=_resolve_all)

    assert excinfo.value.exit_code != 0
