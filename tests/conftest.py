"""Pytest fixtures for lakepy tests."""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pytest

from lakepy.core.api import DFSResponse
from lakepy.core.exceptions import LakeException, HttpStatusError, NotFound


@dataclass
class Call:
    """One request seen by FakeDFS."""
    method: str
    path: str
    params: Dict[str, Any] = field(default_factory=dict)
    data: Optional[bytes] = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def action(self) -> Optional[str]:
        return self.params.get('action')


class FakeDFS:
    """
    In-memory DFS endpoint implementing the transport protocol.

    Files are committed only on flush, like the real service. Listings
    are scripted per directory through ``listings``.
    """

    def __init__(self):
        self.files: Dict[str, bytes] = {}
        self.pending: Dict[str, bytes] = {}
        self.listings: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[Call] = []
        self._failures: Dict[Tuple[str, Optional[str]], LakeException] = {}

    def fail(self, method: str, action: Optional[str] = None, error: Optional[LakeException] = None):
        """Make every matching request raise ``error`` (HTTP 500 by default)."""
        self._failures[(method, action)] = error or HttpStatusError(500, method, 'fake')

    def calls_for(self, method: str, action: Optional[str] = None) -> List[Call]:
        return [c for c in self.calls if c.method == method and c.action == action]

    def list_calls(self) -> List[Call]:
        return [c for c in self.calls if c.method == 'GET' and c.params.get('resource') == 'filesystem']

    async def request(self, method, path, params=None, data=None, headers=None) -> DFSResponse:
        query = dict(params or [])
        if isinstance(data, str):
            data = data.encode('utf-8')
        call = Call(method, path, query, data, dict(headers or {}))
        self.calls.append(call)

        error = self._failures.get((method, call.action))
        if error is not None:
            raise error

        if method == 'PUT':
            self.files[path] = b''
            self.pending[path] = b''
            return DFSResponse(201)

        if method == 'PATCH' and call.action == 'append':
            if path not in self.files:
                raise NotFound(404, method, path)
            self.pending[path] = bytes(data or b'')
            return DFSResponse(202)

        if method == 'PATCH' and call.action == 'flush':
            buffered = self.pending.get(path, b'')
            position = int(query['position'])
            if position != len(buffered):
                raise HttpStatusError(400, method, path, 'InvalidFlushPosition')
            self.files[path] = buffered
            return DFSResponse(200)

        if method == 'GET' and query.get('resource') == 'filesystem':
            directory = query['directory']
            if directory not in self.listings:
                raise NotFound(404, method, path)
            body = json.dumps({'paths': self.listings[directory]}).encode('utf-8')
            return DFSResponse(200, body)

        if method in ('GET', 'HEAD'):
            if path not in self.files:
                raise NotFound(404, method, path)
            return DFSResponse(200, self.files[path] if method == 'GET' else b'')

        if method == 'DELETE':
            doomed = [p for p in self.files if p == path or p.startswith(path + '/')]
            if not doomed:
                raise NotFound(404, method, path)
            for p in doomed:
                del self.files[p]
            return DFSResponse(200)

        raise HttpStatusError(405, method, path)


def entry(name: str, is_directory: bool = False, is_shortcut: bool = False, account_type: str = None) -> Dict[str, Any]:
    """Raw listing element as the DFS API returns it."""
    data = {
        'name': name,
        'isDirectory': 'true' if is_directory else 'false',
    }
    if is_shortcut:
        data['isShortcut'] = 'true'
        if account_type:
            data['accountType'] = account_type
    return data


@pytest.fixture
def fake_dfs():
    """Fresh in-memory DFS endpoint."""
    return FakeDFS()


@pytest.fixture
def workspace_id():
    return 'ws-1111'


@pytest.fixture
def item_id():
    return 'item-2222'


@pytest.fixture
def raw_entry():
    """Factory for raw listing elements."""
    return entry
