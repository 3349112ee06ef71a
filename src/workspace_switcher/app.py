"""Textual 选择界面 - 列出工作区选项并支持模糊过滤

输入框中的文本按子序列（不区分大小写）匹配标签；回车选择高亮项，Esc 退出。
"""

from typing import Optional, Sequence

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Input, Label, ListItem, ListView, Static

from .config import WorkspaceContext
from .models import WorkspaceEntry


def fuzzy_match(query: str, text: str) -> bool:
    """query 的字符是否按顺序出现在 text 中（不区分大小写，忽略空白）"""
    chars = iter(text.lower())
    return all(ch in chars for ch in query.lower() if not ch.isspace())


class EntryItem(ListItem):
    """工作区列表项"""

    def __init__(self, entry: WorkspaceEntry, label: str):
        super().__init__()
        self.entry = entry
        self.label_text = label

    def compose(self) -> ComposeResult:
        yield Label(self.label_text)


class SelectorApp(App):
    """工作区选择器"""

    CSS = """
    Screen { background: $surface; }
    .section-title { text-style: bold; color: $warning; padding: 0 1; }
    Input { margin: 0 0 1 0; height: 3; }
    ListView { height: 1fr; margin: 0; padding: 0; background: transparent; }
    ListItem { padding: 0; height: 1; }
    ListItem > Label { padding: 0 1; }
    ListItem.-highlight { background: $primary 30%; }
    #status-line { dock: bottom; height: 1; background: $surface-darken-1; color: $text-muted; padding: 0 1; }
    """

    BINDINGS = [
        Binding("escape", "quit", "退出"),
        Binding("up", "move_up", "上移", show=False),
        Binding("down", "move_down", "下移", show=False),
        Binding("ctrl+p", "move_up", show=False),
        Binding("ctrl+n", "move_down", show=False),
    ]

    def __init__(
        self,
        choices: Sequence[WorkspaceEntry],
        context: WorkspaceContext,
        title: str = "Select Workspace",
    ):
        super().__init__()
        self.choices = list(choices)
        self.workspace_context = context
        self.selector_title = title
        self.labels = [c.label(context.icons, context.home) for c in self.choices]

    def compose(self) -> ComposeResult:
        yield Static(self.selector_title, classes="section-title")
        yield Input(placeholder="输入以过滤...", id="query")
        yield ListView(id="choices")
        yield Static("", id="status-line")

    def on_mount(self) -> None:
        self.update_choices("")
        self.query_one("#query", Input).focus()

    def filtered(self, query: str) -> list[tuple[WorkspaceEntry, str]]:
        return [
            (entry, label)
            for entry, label in zip(self.choices, self.labels)
            if fuzzy_match(query, label)
        ]

    def update_choices(self, query: str) -> None:
        """按查询重建列表"""
        list_view = self.query_one("#choices", ListView)
        matches = self.filtered(query)
        list_view.clear()
        list_view.extend(EntryItem(entry, label) for entry, label in matches)
        if matches:
            self.call_after_refresh(setattr, list_view, "index", 0)
        self.query_one("#status-line", Static).update(
            f"{len(matches)}/{len(self.choices)}"
        )

    @on(Input.Changed, "#query")
    def on_query_changed(self, event: Input.Changed) -> None:
        self.update_choices(event.value)

    @on(Input.Submitted, "#query")
    def on_query_submitted(self, event: Input.Submitted) -> None:
        item = self.query_one("#choices", ListView).highlighted_child
        if isinstance(item, EntryItem):
            self.exit(item.entry)

    @on(ListView.Selected, "#choices")
    def on_choice_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, EntryItem):
            self.exit(event.item.entry)

    def action_move_up(self) -> None:
        self.query_one("#choices", ListView).action_cursor_up()

    def action_move_down(self) -> None:
        self.query_one("#choices", ListView).action_cursor_down()


def run_selector(
    choices: Sequence[WorkspaceEntry],
    context: WorkspaceContext,
) -> Optional[WorkspaceEntry]:
    """运行选择界面，返回选中的条目（取消时返回 None）"""
    if not choices:
        return None
    app = SelectorApp(choices, context)
    return app.run()
