"""集成测试共享 fixture"""

from collections.abc import Iterable
from pathlib import Path

import pytest
import pytest_asyncio
from ehsdesk.cli.menu import Console
from ehsdesk.cli.services import create_services
from ehsdesk.core.config import AppConfig
from ehsdesk.core.store import create_store_group


class ReplayConsole(Console):
    """回放预先录好的输入，收集全部输出"""

    def __init__(self, lines: Iterable[str]) -> None:
        self._pending = list(lines)
        self.output: list[str] = []
        super().__init__(read_line=self._replay, write=self.output.append)

    async def _replay(self, prompt: str) -> str:
        if not self._pending:
            raise EOFError
        return self._pending.pop(0)


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """集成测试用运行配置"""
    return AppConfig(
        db_path=str(tmp_path / "data" / "ehs.db"),
        media_dir=tmp_path / "data" / "uploads",
    )


@pytest_asyncio.fixture
async def integration_services(app_config: AppConfig):
    store_group = await create_store_group(app_config.db_path, app_config.media_dir)
    yield create_services(store_group)
    await store_group.close()


@pytest.fixture
def replay_console():
    return ReplayConsole


@pytest.fixture
def evidence(tmp_path: Path) -> Path:
    path = tmp_path / "ladder.png"
    path.write_bytes(b"\x89PNG ladder photo")
    return path
