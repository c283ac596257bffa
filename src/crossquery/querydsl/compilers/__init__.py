from .base import BaseWhere
from .mongo import MongoWhereCompiler, mongo_where
from .sql import SqlWhereCompiler, sql_where
from .universal import UniversalTranslator, universal_translator

__all__ = (
    "BaseWhere",
    "MongoWhereCompiler",
    "mongo_where",
    "SqlWhereCompiler",
    "sql_where",
    "UniversalTranslator",
    "universal_translator",
)
