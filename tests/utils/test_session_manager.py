#!/usr/bin/env python3
"""
Unit тесты для session_manager.py
"""

import pytest
from pydantic import ValidationError

from vfs_tools_mcp.models.session import TurnStatus
from vfs_tools_mcp.utils.config import ServiceConfig
from vfs_tools_mcp.utils.session_manager import SessionManager


class TestSessionManager:
    """Тесты для SessionManager"""

    @pytest.fixture
    def manager(self):
        """Создает экземпляр SessionManager"""
        return SessionManager(ServiceConfig())

    @pytest.mark.asyncio
    async def test_turn_lifecycle(self, manager):
        """Тест полного цикла хода"""
        turn = manager.begin_turn("s1", {"/App.jsx": {"type": "file", "content": "a"}})
        await turn.call_tool("str_replace_editor", {"command": "str_replace", "path": "/App.jsx", "old_str": "a", "new_str": "b"})

        files = manager.end_turn("s1")

        assert files == {"/App.jsx": {"type": "file", "content": "b"}}
        with pytest.raises(KeyError):
            manager.get_turn("s1")

    def test_sessions_are_isolated(self, manager):
        """Тест изоляции сессий"""
        first = manager.begin_turn("s1", {"/a.txt": {"type": "file", "content": "a"}})
        second = manager.begin_turn("s2")
        assert manager.get_turn("s1") is first
        assert manager.get_turn("s2") is second
        assert not second.vfs.exists("/a.txt")

    def test_new_turn_aborts_open_turn(self, manager):
        """Тест отмены незавершенного хода"""
        first = manager.begin_turn("s1")
        second = manager.begin_turn("s1")
        assert first.status is TurnStatus.ABORTED
        assert manager.get_turn("s1") is second

    def test_invalid_snapshot_keeps_open_turn(self, manager):
        """Тест сохранения открытого хода при некорректном снимке"""
        first = manager.begin_turn("s1", {"/a.txt": {"type": "file", "content": "a"}})

        with pytest.raises(ValidationError):
            manager.begin_turn("s1", {"/x": {"type": "bogus"}})

        assert manager.get_turn("s1") is first
        assert first.status is TurnStatus.ACTIVE
        assert first.vfs.read("/a.txt") == "a"

    def test_end_turn_without_begin(self, manager):
        """Тест завершения несуществующего хода"""
        with pytest.raises(KeyError):
            manager.end_turn("missing")
