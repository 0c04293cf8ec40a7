"""Shared transcript records for tests.

Each fixture returns a fresh dict, so tests may mutate it before dumping it
to a JSONL line.
"""

from __future__ import annotations

from typing import Any

import pytest

SESSION_ID = '5f0b7c1e-2f6d-4b8a-9c3e-7d2a1b0e9f44'


def _identity(uuid: str) -> dict[str, Any]:
    return {
        'uuid': uuid,
        'timestamp': '2025-07-04T10:59:44.274Z',
        'sessionId': SESSION_ID,
        'cwd': '/home/dev/project',
        'version': '1.0.43',
        'userType': 'external',
        'isSidechain': False,
    }


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's LOAD_ENV_FILE out of settings under test."""
    monkeypatch.delenv('LOAD_ENV_FILE', raising=False)


@pytest.fixture
def user_record() -> dict[str, Any]:
    return {
        **_identity('11111111-1111-4111-8111-111111111111'),
        'type': 'user',
        'parentUuid': None,
        'message': {'role': 'user', 'content': 'hello'},
    }


@pytest.fixture
def assistant_record() -> dict[str, Any]:
    return {
        **_identity('22222222-2222-4222-8222-222222222222'),
        'type': 'assistant',
        'parentUuid': '11111111-1111-4111-8111-111111111111',
        'requestId': 'req_01',
        'message': {
            'id': 'msg_01',
            'type': 'message',
            'role': 'assistant',
            'model': 'claude-sonnet-4-20250514',
            'content': [{'type': 'text', 'text': 'Hi there'}],
            'stop_reason': 'end_turn',
            'stop_sequence': None,
            'usage': {'input_tokens': 4, 'output_tokens': 3},
        },
    }


@pytest.fixture
def system_record() -> dict[str, Any]:
    return {
        **_identity('33333333-3333-4333-8333-333333333333'),
        'type': 'system',
        'parentUuid': '22222222-2222-4222-8222-222222222222',
        'content': 'Running PreToolUse hooks',
        'isMeta': False,
    }


@pytest.fixture
def summary_record() -> dict[str, Any]:
    return {'type': 'summary', 'summary': 'Parser refactor', 'leafUuid': '22222222-2222-4222-8222-222222222222'}
