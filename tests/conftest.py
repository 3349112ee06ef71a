"""测试替身"""

import pytest

from workspace_switcher.errors import LayoutError


class FakeRunner:
    """按命令返回预设输出的 ProcessRunner 替身"""

    def __init__(self, outputs=None, errors=None):
        self.outputs = outputs or {}
        self.errors = errors or {}
        self.commands = []

    def run(self, command):
        self.commands.append(command)
        if command in self.errors:
            return "", self.errors[command]
        return self.outputs.get(command, ""), None


class FakeTmux:
    """TmuxController 替身"""

    def __init__(self, sessions=None, first_pane="%0", create_ok=True):
        self.sessions = list(sessions or [])
        self.first_pane = first_pane
        self.create_ok = create_ok
        self.created = []
        self.switched = []

    def list_sessions(self):
        return list(self.sessions)

    def session_exists(self, session):
        return session in self.sessions

    def create_session(self, session, cwd):
        if not self.create_ok:
            return None
        self.created.append((session, cwd))
        self.sessions.append(session)
        return self.first_pane

    def switch_session(self, session):
        self.switched.append(session)
        return True


class FakePaneControl:
    """记录调用的 PaneControl 替身

    fail_on: 第几次 split（从 1 开始）失败
    """

    def __init__(self, fail_on=None, fail_tabs=False):
        self.fail_on = set(fail_on or ())
        self.fail_tabs = fail_tabs
        self.calls = []
        self._splits = 0
        self._next = 1

    def _new_handle(self):
        handle = f"%{self._next}"
        self._next += 1
        return handle

    def split(self, pane, direction, fraction):
        self._splits += 1
        if self._splits in self.fail_on:
            self.calls.append(('split-failed', pane, direction, fraction))
            raise LayoutError("no space for new pane")
        handle = self._new_handle()
        self.calls.append(('split', pane, direction, fraction, handle))
        return handle

    def send_text(self, pane, text):
        self.calls.append(('send', pane, text))

    def new_tab(self, session, name=None, cwd=None):
        if self.fail_tabs:
            raise LayoutError("cannot create window")
        handle = self._new_handle()
        self.calls.append(('tab', session, name, cwd, handle))
        return handle

    def rename_tab(self, pane, name):
        self.calls.append(('rename', pane, name))

    def sent(self):
        return [(c[1], c[2]) for c in self.calls if c[0] == 'send']


@pytest.fixture
def control():
    return FakePaneControl()


@pytest.fixture
def tmux():
    return FakeTmux()
