#!/usr/bin/env python3
"""
Unit тесты для file_manager_tool.py
"""

import pytest

from vfs_tools_mcp.tools.base_vfs_tool import VFS_ARGUMENT
from vfs_tools_mcp.tools.file_manager_tool import FileManagerTool
from vfs_tools_mcp.vfs import NotFoundError, VirtualFileSystem


class TestFileManagerTool:
    """Тесты для FileManagerTool"""

    @pytest.fixture
    def file_manager(self):
        """Создает экземпляр FileManagerTool"""
        return FileManagerTool()

    @pytest.fixture
    def vfs(self):
        """Создает VirtualFileSystem с файлами"""
        vfs = VirtualFileSystem()
        vfs.write("/src/App.tsx", "const x = 1;")
        vfs.write("/src/components/Button.tsx", "button")
        return vfs

    @pytest.mark.asyncio
    async def test_rename_scenario(self, file_manager, vfs):
        """Тест переименования файла"""
        result = await file_manager.execute(
            {"command": "rename", "path": "/src/App.tsx", "new_path": "/src/Main.tsx", VFS_ARGUMENT: vfs}
        )

        assert result.error is None
        assert result.output == "Successfully renamed /src/App.tsx to /src/Main.tsx"
        with pytest.raises(NotFoundError):
            vfs.read("/src/App.tsx")
        assert vfs.read("/src/Main.tsx") == "const x = 1;"

    @pytest.mark.asyncio
    async def test_rename_creates_parent_directories(self, file_manager, vfs):
        """Тест создания родительских директорий при переименовании"""
        result = await file_manager.execute(
            {"command": "rename", "path": "/src/components", "new_path": "/lib/ui/components", VFS_ARGUMENT: vfs}
        )
        assert result.error is None
        assert vfs.read("/lib/ui/components/Button.tsx") == "button"

    @pytest.mark.asyncio
    async def test_rename_onto_existing(self, file_manager, vfs):
        """Тест переименования в существующий путь"""
        vfs.write("/src/Main.tsx", "main")
        result = await file_manager.execute(
            {"command": "rename", "path": "/src/App.tsx", "new_path": "/src/Main.tsx", VFS_ARGUMENT: vfs}
        )
        assert result.error == "File already exists at: /src/Main.tsx."
        assert result.as_dict() == {"success": False, "error": "File already exists at: /src/Main.tsx."}
        assert vfs.read("/src/App.tsx") == "const x = 1;"

    @pytest.mark.asyncio
    async def test_rename_requires_new_path(self, file_manager, vfs):
        """Тест отсутствия new_path"""
        result = await file_manager.execute({"command": "rename", "path": "/src/App.tsx", VFS_ARGUMENT: vfs})
        assert "`new_path`" in result.error

    @pytest.mark.asyncio
    async def test_delete_directory(self, file_manager, vfs):
        """Тест удаления директории"""
        result = await file_manager.execute({"command": "delete", "path": "/src/components", VFS_ARGUMENT: vfs})
        assert result.as_dict() == {"success": True, "message": "Successfully deleted /src/components"}
        assert not vfs.exists("/src/components/Button.tsx")

    @pytest.mark.asyncio
    async def test_delete_missing(self, file_manager, vfs):
        """Тест удаления несуществующего пути"""
        result = await file_manager.execute({"command": "delete", "path": "/nope", VFS_ARGUMENT: vfs})
        assert result.error == "The path /nope does not exist."

    @pytest.mark.asyncio
    async def test_delete_root(self, file_manager, vfs):
        """Тест удаления корня"""
        result = await file_manager.execute({"command": "delete", "path": "/", VFS_ARGUMENT: vfs})
        assert result.error == "Cannot delete the root directory."
        assert vfs.exists("/src/App.tsx")

    @pytest.mark.asyncio
    async def test_unknown_command(self, file_manager, vfs):
        """Тест неизвестной команды"""
        result = await file_manager.execute({"command": "view", "path": "/src", VFS_ARGUMENT: vfs})
        assert result.error == (
            "Unrecognized command view. The allowed commands for the file_manager tool are: rename, delete"
        )
