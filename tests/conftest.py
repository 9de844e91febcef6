#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Shared pytest fixtures for remotegit tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from provide.testkit.mocking import Mock

from remotegit.config import AuthMethod, ConnectionConfig, HostKeyPolicy, save_config
from remotegit.engines.git import GitOperationOrchestrator
from tests.helpers.fake_remote import FakeRemote


@pytest.fixture
def connection_config() -> ConnectionConfig:
    """A configured password-auth connection without a GitHub token."""
    return ConnectionConfig(
        host="git.example.com",
        port=22,
        user="deploy",
        auth_method=AuthMethod.PASSWORD,
        password="s3cret",
        working_dir="/srv/projects",
        host_key_policy=HostKeyPolicy.INSECURE,
        is_configured=True,
    )


@pytest.fixture
def token_config(connection_config: ConnectionConfig) -> ConnectionConfig:
    """The same connection with a GitHub token configured."""
    return connection_config.with_changes(github_token="abc123")


@pytest.fixture
def fake_remote() -> FakeRemote:
    return FakeRemote()


def _mock_connection(config: ConnectionConfig) -> Mock:
    connection = Mock()
    connection.config = config
    connection.ensure_connected.return_value = False
    return connection


@pytest.fixture
def make_orchestrator(fake_remote: FakeRemote):
    """Build an orchestrator over a mocked connection and the fake remote."""

    def _make(config: ConnectionConfig) -> GitOperationOrchestrator:
        return GitOperationOrchestrator(_mock_connection(config), executor=fake_remote)

    return _make


@pytest.fixture
def orchestrator(make_orchestrator, connection_config: ConnectionConfig) -> GitOperationOrchestrator:
    return make_orchestrator(connection_config)


@pytest.fixture
def token_orchestrator(make_orchestrator, token_config: ConnectionConfig) -> GitOperationOrchestrator:
    return make_orchestrator(token_config)


@pytest.fixture
def config_file(tmp_path: Path, connection_config: ConnectionConfig) -> Path:
    """A saved, configured config.json."""
    path = tmp_path / "config.json"
    save_config(connection_config, path)
    return path


# 🔼⚙️🔚
