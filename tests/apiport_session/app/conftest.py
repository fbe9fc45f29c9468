"""Shared fixtures for app-level tests."""
import base64
import json

import httpx
import pytest
from dependency_injector import providers

from apiport_session.app import main as main_module
from apiport_session.app.config import AppConfig, DirectoryConfig, OptionsConfig
from apiport_session.infra.engine import HttpAnalysisEngine


class ServiceStub:
    """Programmable analysis service behind httpx.MockTransport."""

    def __init__(self):
        self.requests: list[dict] = []
        self.status = 200
        self.body: dict = {
            "result": {"submissionId": "sub-1", "targets": [".NET Core, Version=3.1"]},
            "reports": {
                "HTML": base64.b64encode(b"<html>report</html>").decode("ascii"),
                "Json": base64.b64encode(b"{}").decode("ascii"),
            },
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        if self.status != 200:
            return httpx.Response(self.status)
        return httpx.Response(200, json=self.body)


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    return AppConfig(
        directories=DirectoryConfig(home=tmp_path / "home"),
        options=OptionsConfig(output_directory=tmp_path / "reports"),
    )


@pytest.fixture
def service(monkeypatch) -> ServiceStub:
    """Route the container's engine to a stubbed analysis service."""
    stub = ServiceStub()
    original = main_module._create_container

    def _create_container(config=None):
        container = original(config)
        container.engine.override(
            providers.Singleton(
                HttpAnalysisEngine,
                endpoint="https://portability.test",
                issues=container.diagnostics_log,
                logger=container.logger,
                transport=httpx.MockTransport(stub.handler),
            )
        )
        return container

    monkeypatch.setattr(main_module, "_create_container", _create_container)
    return stub
