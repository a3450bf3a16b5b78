"""apps/cli 测试配置 -- 服务组与脚本化终端 fixture"""

from collections.abc import Iterable
from pathlib import Path

import pytest
import pytest_asyncio
from ehsdesk.cli.menu import Console
from ehsdesk.cli.services import ServiceBundle, create_services
from ehsdesk.core.models import Role


class ScriptedConsole(Console):
    """按脚本逐行喂入输入，记录所有输出；脚本耗尽时模拟 EOF"""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = list(lines)
        self.prompts: list[str] = []
        self.output: list[str] = []
        super().__init__(read_line=self._next_line, write=self.output.append)

    async def _next_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._lines:
            raise EOFError
        return self._lines.pop(0)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


@pytest.fixture
def scripted_console():
    """工厂：scripted_console(["1", "alice", ...])"""
    return ScriptedConsole


@pytest_asyncio.fixture
async def services(store_group) -> ServiceBundle:
    """无延迟的服务组"""
    return create_services(store_group)


@pytest_asyncio.fixture
async def alice(services: ServiceBundle):
    """已注册的工人 alice / pw1"""
    return await services.credentials.register("alice", "pw1", Role.WORKER)


@pytest_asyncio.fixture
async def bob(services: ServiceBundle):
    """已注册的经理 bob / pw2"""
    return await services.credentials.register("bob", "pw2", Role.MANAGER)


@pytest.fixture
def media_file(tmp_path: Path) -> Path:
    """可上传的媒体文件"""
    path = tmp_path / "evidence.jpg"
    path.write_bytes(b"\xff\xd8\xff fake jpeg")
    return path
