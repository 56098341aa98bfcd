from .predicate import OPERATORS, Predicate, PredicateGroup
from .query import Query, QueryFactory
from .result import QueryResult

__all__ = [
    "OPERATORS",
    "Predicate",
    "PredicateGroup",
    "Query",
    "QueryFactory",
    "QueryResult",
]
