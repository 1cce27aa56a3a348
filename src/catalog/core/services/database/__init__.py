from .db_manage import DbManageService
from .db_session import DbSessionService
from .db_utils import install_sqlite_functions

__all__ = ["DbManageService", "DbSessionService", "install_sqlite_functions"]
