"""异常定义

所有异常都是非致命的：调用方记录日志后降级处理（跳过条目、返回空列表、放弃子树）。
"""


class WorkspaceError(Exception):
    """工作区相关异常的基类"""


class ConfigurationError(WorkspaceError):
    """配置条目格式错误（跳过该条目，其余条目照常处理）"""


class ResolutionError(WorkspaceError):
    """路径展开失败（例如无法确定 home 目录）"""


class ExecutionError(WorkspaceError):
    """外部命令执行失败"""


class LayoutError(WorkspaceError):
    """分屏操作失败（放弃当前子树的布局）"""
