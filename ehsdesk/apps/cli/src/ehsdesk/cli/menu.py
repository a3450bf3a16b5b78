"""交互菜单 -- 顶层菜单 {注册, 登录, 退出} + 经理/工人角色菜单

所有交互都是逐行的提示/应答。EhsError 打印后重新提示，从不中止进程；
输入结束（EOF）等同于退出。终端输入在线程中读取，后台报告可以在等待
输入时继续运行。
"""

import asyncio
import getpass
import threading
from collections.abc import Awaitable, Callable

import structlog
from ehsdesk.core.exceptions import EhsError, InvalidCredentialsError
from ehsdesk.core.models import Task, is_valid_violation_label

from . import render
from .services import ServiceBundle
from .services.credential_service import parse_role
from .services.session import ManagerSession, Session, WorkerSession, open_session

ReadLine = Callable[[str], Awaitable[str]]
Handler = Callable[[], Awaitable[None]]

log = structlog.get_logger()


class EndOfInput(Exception):
    """标准输入已关闭"""


def _resolve(
    future: "asyncio.Future[str]",
    value: str | None,
    error: BaseException | None,
) -> None:
    if future.done():
        return
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(value)


async def _read_detached(reader: Callable[[str], str], prompt: str) -> str:
    """在守护线程中执行阻塞读取

    不占用默认线程池：Ctrl-C 时 asyncio.run 关闭事件循环无需等待仍阻塞在
    input() 上的线程。
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[str] = loop.create_future()

    def target() -> None:
        value: str | None = None
        error: BaseException | None = None
        try:
            value = reader(prompt)
        except BaseException as e:
            error = e
        try:
            loop.call_soon_threadsafe(_resolve, future, value, error)
        except RuntimeError:
            # 事件循环已关闭，读取结果无人等待
            log.debug("stdin_read_discarded", prompt=prompt)

    threading.Thread(target=target, name="ehsdesk-stdin", daemon=True).start()
    return await future


async def _stdin_line(prompt: str) -> str:
    return await _read_detached(input, prompt)


async def _stdin_secret(prompt: str) -> str:
    return await _read_detached(getpass.getpass, prompt)


class Console:
    """终端读写封装，测试中可替换为脚本化输入"""

    def __init__(
        self,
        read_line: ReadLine | None = None,
        read_secret: ReadLine | None = None,
        write: Callable[[str], None] | None = None,
    ) -> None:
        self._read_line = read_line or _stdin_line
        self._read_secret = read_secret or read_line or _stdin_secret
        self._write = write or print

    def say(self, text: str = "") -> None:
        self._write(text)

    async def ask(self, prompt: str) -> str:
        try:
            line = await self._read_line(prompt)
        except EOFError:
            raise EndOfInput() from None
        return line.strip()

    async def ask_secret(self, prompt: str) -> str:
        try:
            line = await self._read_secret(prompt)
        except EOFError:
            raise EndOfInput() from None
        return line.strip()

    async def ask_non_empty(self, prompt: str, error: str, secret: bool = False) -> str:
        """重复提示直到输入非空"""
        while True:
            value = await (self.ask_secret(prompt) if secret else self.ask(prompt))
            if value:
                return value
            self.say(error)

    async def ask_id(self, prompt: str, error: str) -> int:
        """重复提示直到输入非负整数"""
        while True:
            value = await self.ask(prompt)
            if value.isdigit():
                return int(value)
            self.say(error)


class Menu:
    """EHS 交互菜单"""

    def __init__(self, services: ServiceBundle, console: Console | None = None) -> None:
        self._services = services
        self._console = console or Console()

    async def run(self) -> None:
        """顶层循环，直到选择退出或输入结束"""
        console = self._console
        try:
            while True:
                console.say("\n=== EHS 系统 ===")
                console.say("1. 注册\n2. 登录\n0. 退出")
                choice = await console.ask("选择: ")

                if choice == "0":
                    console.say("正在退出...")
                    break
                if choice not in ("1", "2"):
                    console.say("无效选择!")
                    continue

                username = await console.ask_non_empty(
                    "用户名: ", "用户名不能为空，请重新输入。"
                )
                password = await console.ask_non_empty(
                    "密码: ", "密码不能为空，请重新输入。", secret=True
                )
                if choice == "1":
                    await self.register(username, password)
                else:
                    await self.login(username, password)
        except EndOfInput:
            console.say("\n输入结束，正在退出...")
        finally:
            await self._drain_reports()

    async def register(self, username: str, password: str) -> None:
        console = self._console
        while True:
            raw_role = await console.ask("角色 (worker/manager): ")
            if not raw_role:
                console.say("角色不能为空，请输入有效角色。")
                continue
            try:
                role = parse_role(raw_role)
            except EhsError:
                console.say("无效角色，请输入 'worker' 或 'manager'。")
                continue
            break

        credentials = self._services.credentials
        try:
            if await credentials.exists(username, password):
                console.say("该凭据的用户已存在!")
                return
            await credentials.register(username, password, role)
        except EhsError as e:
            console.say(f"注册失败: {e.message}")
            return
        console.say("注册成功!")

    async def login(self, username: str, password: str) -> None:
        console = self._console
        try:
            session = await open_session(self._services, username, password)
        except InvalidCredentialsError:
            console.say("凭据无效!")
            return
        except EhsError as e:
            console.say(f"登录失败: {e.message}")
            return

        console.say("登录成功!")
        if session.account.is_manager:
            await self._role_loop(session, "经理菜单", self._manager_items(session))
        else:
            await self._role_loop(session, "工人菜单", self._worker_items(session))
            await self._drain_reports()

    async def _role_loop(
        self,
        session: Session,
        title: str,
        items: dict[str, tuple[str, str, Handler]],
    ) -> None:
        """角色菜单循环：每个选项先做能力检查，再执行处理函数"""
        console = self._console
        while True:
            console.say(f"\n--- {title} ---")
            for key, (label, _, _) in items.items():
                console.say(f"{key}. {label}")
            console.say("0. 注销")
            choice = await console.ask("输入选项: ")

            if choice == "0":
                console.say("正在注销...")
                return
            item = items.get(choice)
            if item is None:
                console.say("无效选择!")
                continue

            _, action, handler = item
            try:
                session.require(action)
                await handler()
            except EhsError as e:
                console.say(f"错误: {e.message}")

    # ---- 经理 ----

    def _manager_items(self, session: ManagerSession) -> dict[str, tuple[str, str, Handler]]:
        return {
            "1": ("指派任务", "assign_task", lambda: self._assign_task(session)),
            "2": ("报告违规", "report_violation", lambda: self._report_violation(session)),
            "3": ("查看规则", "view_rules", lambda: self._view_rules(session)),
            "4": ("新增规则", "add_rule", lambda: self._add_rule(session)),
            "5": ("查看规则反馈", "view_feedback", lambda: self._view_feedback(session)),
            "6": ("查看所有任务", "list_all_tasks", lambda: self._list_all_tasks(session)),
            "7": ("删除任务", "delete_task", lambda: self._delete_task(session)),
            "8": ("删除规则", "delete_rule", lambda: self._delete_rule(session)),
        }

    async def _assign_task(self, session: ManagerSession) -> None:
        console = self._console
        console.say("\n--- 可指派的工人 ---")
        for worker in await session.list_workers():
            console.say(render.format_worker(worker))

        worker_id = await console.ask_id(
            "输入工人 ID (非负整数): ", "输入无效，请重新输入。"
        )
        description = await console.ask_non_empty(
            "输入任务内容: ", "任务内容不能为空。"
        )
        task = await session.assign_task(worker_id, description)
        console.say(f"任务已指派 (任务 ID: {task.id})。")

    async def _report_violation(self, session: ManagerSession) -> None:
        console = self._console
        console.say("\n--- 待处理任务 ---")
        for task in await session.list_pending_tasks():
            console.say(render.format_task_brief(task))

        task_id = await console.ask_id(
            "输入要报告违规的任务 ID: ", "输入无效，任务 ID 必须是非负整数。"
        )
        while True:
            label = await console.ask("输入新的任务状态 (例如 violation, incomplete): ")
            if is_valid_violation_label(label):
                break
            console.say("输入无效，任务状态必须是非数字的字符串。")
        comment = await console.ask("违规备注 (可留空): ")

        await session.report_violation(task_id, label, comment)
        console.say("任务已更新违规信息。")

    async def _add_rule(self, session: ManagerSession) -> None:
        text = await self._console.ask_non_empty(
            "输入新的安全规则: ", "规则不能为空，请输入有效的安全规则。"
        )
        rule = await session.add_rule(text)
        self._console.say(f"新规则已添加 (规则 ID: {rule.id})。")

    async def _list_all_tasks(self, session: ManagerSession) -> None:
        self._console.say("\n=== 任务详情 ===")
        self._console.say(render.format_task_list(await session.list_all_tasks(), True))

    async def _delete_task(self, session: ManagerSession) -> None:
        console = self._console
        console.say("\n--- 现有任务 ---")
        for task in await session.list_all_tasks():
            console.say(render.format_task_brief(task))

        task_id = await console.ask_id(
            "输入要删除的任务 ID: ", "输入无效，任务 ID 必须是非负整数。"
        )
        await session.delete_task(task_id)
        console.say("任务已删除。")

    async def _delete_rule(self, session: ManagerSession) -> None:
        console = self._console
        console.say("\n--- 现有规则 ---")
        for rule in await session.view_rules():
            console.say(render.format_rule(rule))

        rule_id = await console.ask_id(
            "输入要删除的规则 ID: ", "输入无效，规则 ID 必须是非负整数。"
        )
        await session.delete_rule(rule_id)
        console.say("规则已删除。")

    # ---- 工人 ----

    def _worker_items(self, session: WorkerSession) -> dict[str, tuple[str, str, Handler]]:
        return {
            "1": ("查看我的任务", "list_my_tasks", lambda: self._list_my_tasks(session)),
            "2": ("提交任务报告", "report_work", lambda: self._report_work(session)),
            "3": ("查看安全规则", "view_rules", lambda: self._view_rules(session)),
            "4": ("反馈规则", "give_feedback", lambda: self._give_feedback(session)),
            "5": ("查看规则反馈", "view_feedback", lambda: self._view_feedback(session)),
        }

    async def _list_my_tasks(self, session: WorkerSession) -> None:
        self._console.say("\n=== 任务详情 ===")
        self._console.say(render.format_task_list(await session.list_my_tasks()))

    async def _report_work(self, session: WorkerSession) -> None:
        console = self._console
        open_tasks = await session.list_open_tasks()
        if not open_tasks:
            console.say("没有可提交报告的任务。")
            return

        console.say("\n已指派任务:")
        for i, task in enumerate(open_tasks, start=1):
            console.say(f"{i}. {render.format_task_brief(task)}")

        valid_ids = {task.id for task in open_tasks}
        while True:
            task_id = await console.ask_id(
                "输入要报告的任务 ID: ", "任务 ID 无效或未指派给你，请重试。"
            )
            if task_id in valid_ids:
                break
            console.say("任务 ID 无效或未指派给你，请重试。")

        report_text = await console.ask("输入报告内容: ")
        media_source = await console.ask("输入媒体文件路径: ")

        handle = session.report_work(task_id, report_text, media_source)
        handle.add_done_callback(self._announce_report)
        console.say(f"任务 {task_id} 的报告正在后台提交...")

    def _announce_report(self, handle: "asyncio.Task[Task]") -> None:
        if handle.cancelled():
            self._console.say("[后台] 报告提交已取消。")
            return
        error = handle.exception()
        if error is None:
            self._console.say(f"[后台] 任务 {handle.result().id} 报告提交成功。")
        elif isinstance(error, EhsError):
            self._console.say(f"[后台] 报告提交失败: {error.message}")
        else:
            self._console.say(f"[后台] 报告提交失败: {error}")

    async def _give_feedback(self, session: WorkerSession) -> None:
        console = self._console
        console.say("\n--- 现有规则 ---")
        for rule in await session.view_rules():
            console.say(render.format_rule(rule))

        rule_id = await console.ask_id(
            "输入要反馈的规则 ID: ", "规则 ID 无效，请重试。"
        )
        feedback = await console.ask("输入你的反馈: ")
        await session.give_feedback(rule_id, feedback)
        console.say("反馈已提交。")

    # ---- 公共 ----

    async def _view_rules(self, session: Session) -> None:
        console = self._console
        console.say("\n--- 安全规则 ---")
        rules = await session.view_rules()
        if not rules:
            console.say("暂无规则。")
        for rule in rules:
            console.say(render.format_rule(rule))

    async def _view_feedback(self, session: Session) -> None:
        console = self._console
        console.say("\n--- 规则反馈 ---")
        for rule in await session.view_feedback():
            console.say(render.format_rule_feedback(rule))

    async def _drain_reports(self) -> None:
        """等待仍在后台提交的报告"""
        tasks = self._services.tasks
        if tasks.pending_report_count:
            self._console.say(f"等待 {tasks.pending_report_count} 个报告提交完成...")
            await tasks.wait_for_reports()


__all__ = ["Console", "EndOfInput", "Menu"]
