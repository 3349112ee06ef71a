"""命令行入口 - 工作区选择 + tmux 会话管理"""

import argparse
import logging
import shutil
import sys
from pathlib import Path

from .activator import Activator
from .aggregator import collect_choices, find_choice
from .config import CONFIG_DIR, load_context, save_default_config
from .tmux_control import TmuxController, check_tmux

LOG_DIR = CONFIG_DIR / "logs"
LOG_FILE = LOG_DIR / "switcher.log"

DEFAULT_BIND_COMMAND = "workspace-switcher"


def setup_logging(verbose: bool = False) -> None:
    """配置日志：写入文件，verbose 时同时输出到 stderr"""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    handlers: list[logging.Handler] = [logging.FileHandler(LOG_FILE, encoding='utf-8')]
    if verbose:
        handlers.append(logging.StreamHandler(sys.stderr))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        handlers=handlers,
    )


def main(argv=None):
    """主入口"""
    parser = argparse.ArgumentParser(
        prog='workspace-switcher',
        description='workspace-switcher - 工作区选择 + tmux session 管理',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
选项来源（按优先级，重复的 id 只保留第一次出现）:
  1. 已存在的 tmux 会话
  2. 配置中的目录与 git worktree
  3. zoxide 目录历史

使用方式:
  workspace-switcher                 # 打开选择界面
  workspace-switcher --list          # 列出所有选项
  workspace-switcher --switch ~/src  # 直接切换
  workspace-switcher --bind f        # 绑定 tmux 快捷键（prefix + f）
        """
    )

    parser.add_argument('--config', type=Path, help='配置文件路径')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--list', '-l', action='store_true', help='列出所有选项')
    group.add_argument('--switch', '-s', metavar='PATH', help='切换到指定工作区')
    group.add_argument('--bind', metavar='KEY', help='绑定 tmux 快捷键')
    group.add_argument('--check', '-c', action='store_true', help='检查环境')
    group.add_argument('--init-config', action='store_true', help='生成默认配置文件')
    group.add_argument('--version', '-v', action='store_true', help='显示版本')
    parser.add_argument('--verbose', action='store_true', help='输出调试日志')

    args = parser.parse_args(argv)

    if args.version:
        from . import __version__
        print(f"workspace-switcher v{__version__}")
        return 0

    if args.check:
        return check_environment()

    if args.init_config:
        path = save_default_config(args.config)
        print(f"✅ 已生成默认配置: {path}")
        return 0

    if args.bind:
        if TmuxController().bind_key(args.bind, DEFAULT_BIND_COMMAND):
            print(f"✅ 已绑定 prefix + {args.bind}")
            return 0
        print("❌ 绑定失败（需要运行中的 tmux server）", file=sys.stderr)
        return 1

    setup_logging(args.verbose)
    context = load_context(args.config)
    choices = collect_choices(context)

    if args.list:
        for choice in choices:
            print(choice.label(context.icons, context.home))
        return 0

    if args.switch:
        choice = find_choice(choices, args.switch, context)
        if choice is None:
            print(f"❌ 未找到工作区: {args.switch}", file=sys.stderr)
            return 1
    else:
        if not sys.stdout.isatty():
            print("错误: 需要在终端中运行", file=sys.stderr)
            return 1
        from .app import run_selector
        choice = run_selector(choices, context)
        if choice is None:
            return 0

    if not Activator().activate(choice, context):
        print(f"❌ 激活工作区失败: {choice.id}", file=sys.stderr)
        return 1
    return 0


def check_environment():
    """检查环境"""
    print("检查环境...\n")
    all_ok = True

    ok, msg = check_tmux()
    if ok:
        print(f"✅ tmux: {msg}")
    else:
        print(f"❌ tmux: {msg}")
        all_ok = False

    # git 与 zoxide 是可选的，缺失时对应来源为空
    for tool in ('git', 'zoxide'):
        path = shutil.which(tool)
        if path:
            print(f"✅ {tool}: {path}")
        else:
            print(f"⚠️  {tool}: 未找到（对应来源将为空）")

    try:
        import textual
        print(f"✅ Textual: {textual.__version__}")
    except ImportError:
        print("❌ Textual: 未安装")
        all_ok = False

    print()
    if all_ok:
        print("✓ 所有检查通过")
    else:
        print("✗ 部分检查失败，请查看上方信息")

    return 0 if all_ok else 1


if __name__ == '__main__':
    sys.exit(main())
