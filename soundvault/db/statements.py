"""
Dialect-aware statement helpers.
"""
from sqlalchemy import insert
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.orm import Session


def insert_ignore(db: Session, model, **values) -> int:
    """
    Insert a row unless it collides with a unique constraint.

    Issues a single conditional INSERT so concurrent duplicates are settled
    by the store's uniqueness constraint.  Returns the number of rows
    inserted (0 or 1).  Does not commit.
    """
    dialect = db.get_bind().dialect.name
    if dialect == "sqlite":
        stmt = sqlite.insert(model).values(**values).on_conflict_do_nothing()
    elif dialect == "postgresql":
        stmt = postgresql.insert(model).values(**values).on_conflict_do_nothing()
    elif dialect in ("mysql", "mariadb"):
        stmt = mysql.insert(model).values(**values).prefix_with("IGNORE")
    else:
        stmt = insert(model).values(**values)
    result = db.execute(stmt)
    return result.rowcount
