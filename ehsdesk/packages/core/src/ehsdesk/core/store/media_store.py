"""MediaStore 文件系统实现

工人报告附带的媒体文件被复制到固定目录，文件名由 (task_id, worker_id)
确定性生成，已存在的同名文件直接覆盖。
"""

import asyncio
import hashlib
import shutil
from pathlib import Path

import structlog

from ..exceptions import MediaCopyError

log = structlog.get_logger()


def compute_hash_and_size(path: Path) -> tuple[str, int]:
    """计算文件 SHA-256 hash 和大小

    Args:
        path: 文件路径

    Returns:
        (sha256_hex, size_bytes) 元组
    """
    content = path.read_bytes()
    return hashlib.sha256(content).hexdigest(), len(content)


class MediaStore:
    """上传媒体的本地目录存储"""

    def __init__(self, media_dir: Path) -> None:
        self._media_dir = media_dir

    def get_media_path(self, task_id: int, worker_id: int) -> Path:
        """获取 (task_id, worker_id) 对应的确定性存储路径"""
        return self._media_dir / f"task_{task_id}_user_{worker_id}"

    async def save(self, task_id: int, worker_id: int, source: str | Path) -> Path:
        """复制媒体文件到存储目录（在线程中执行阻塞 I/O）

        Returns:
            已保存文件的路径

        Raises:
            MediaCopyError: 源文件不可读或复制失败
        """
        return await asyncio.to_thread(self._copy, task_id, worker_id, source)

    def _copy(self, task_id: int, worker_id: int, source: str | Path) -> Path:
        source_path = Path(source)
        destination = self.get_media_path(task_id, worker_id)
        try:
            if not source_path.is_file():
                raise FileNotFoundError(f"不是可读文件: {source_path}")
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source_path, destination)
        except OSError as e:
            log.error(
                "media_copy_failed",
                task_id=task_id,
                worker_id=worker_id,
                source=str(source_path),
                error_type=type(e).__name__,
            )
            raise MediaCopyError(str(source_path), e) from e

        hash_hex, size = compute_hash_and_size(destination)
        log.info(
            "media_saved",
            task_id=task_id,
            worker_id=worker_id,
            path=str(destination),
            size=size,
            sha256=hash_hex,
        )
        return destination
