import json
from io import StringIO
from unittest.mock import patch

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from memorial_site import health

pytestmark = pytest.mark.django_db


def test_health_view_ok(client):
    response = client.get("/health/")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["checks"]["database"]["status"] == "ok"
    assert data["checks"]["seo_templates"]["detail"] == {"count": 0}
    assert "X-Request-ID" in response


def test_health_view_degraded_when_media_missing(client, settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / "missing"

    response = client.get("/health/")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
    assert client.get("/health/?strict=1").status_code == 503


def test_health_view_error_when_database_down(client):
    with patch.object(health, "_check_database", return_value="connection refused"):
        response = client.get("/health/")

    assert response.status_code == 503
    data = response.json()
    assert data["checks"]["seo_templates"]["status"] == "skipped"
    assert data["errors"] == ["Database unavailable: connection refused"]


def test_healthcheck_command_json():
    out = StringIO()

    call_command("healthcheck", "--json", stdout=out)

    assert json.loads(out.getvalue())["status"] == "ok"


def test_healthcheck_command_fails_on_error():
    with patch.object(health, "_check_database", return_value="down"):
        with pytest.raises(CommandError):
            call_command("healthcheck", stdout=StringIO(), stderr=StringIO())
