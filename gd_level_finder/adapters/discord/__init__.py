"""
Discord Adapters

Presentation adapter for the Discord surface: result embeds, the paginator
view and the /findlevel application command.
"""
from .commands import FindLevelCommand, register_findlevel
from .views import ResultsPaginator

__all__ = ["FindLevelCommand", "ResultsPaginator", "register_findlevel"]
