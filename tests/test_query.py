"""Tests for the fluent ``PatternQuery`` wrapper."""

from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy import Column, Integer, String, literal_column, select
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import DeclarativeBase

from sqla_like import PatternFilterSettings
from sqla_like.sqla import PatternQuery


class Base(DeclarativeBase):
    pass


class Listing(Base):
    __tablename__ = "listings"
    id = Column(Integer, primary_key=True)
    title = Column(String)
    status = Column(String)


def render(stmt: Any) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


def test_model_is_inferred_from_statement():
    assert PatternQuery(select(Listing)).model is Listing


def test_statement_without_entity_needs_model():
    with pytest.raises(ValueError):
        PatternQuery(select(literal_column("1")))
    query = PatternQuery(select(literal_column("1")), model=Listing)
    assert query.model is Listing


def test_chain_ands_filters_in_call_order():
    stmt = (
        PatternQuery(select(Listing))
        .match_any({"title": "Rails"})
        .match_all({"title": ["Senior", "Remote"]})
        .exclude_all({"status": "closed"})
        .statement
    )
    assert render(stmt).endswith(
        "WHERE listings.title ILIKE %(title_1)s "
        "AND (listings.title ILIKE %(title_2)s AND listings.title ILIKE %(title_3)s) "
        "AND listings.status NOT ILIKE %(status_1)s"
    )


def test_each_step_returns_new_query():
    base = PatternQuery(select(Listing))
    filtered = base.match_any({"title": "a"})
    assert filtered is not base
    assert base.statement.whereclause is None
    assert filtered.statement.whereclause is not None


def test_where_mixes_ordinary_criteria():
    stmt = (
        PatternQuery(select(Listing))
        .where(Listing.id > 5)
        .exclude_all({"title": ["x", "y"]})
        .statement
    )
    assert render(stmt).endswith(
        "WHERE listings.id > %(id_1)s "
        "AND (listings.title NOT ILIKE %(title_1)s "
        "AND listings.title NOT ILIKE %(title_2)s)"
    )


def test_settings_carry_through_the_chain():
    query = PatternQuery(
        select(Listing), settings=PatternFilterSettings(case_sensitive=True)
    )
    stmt = query.match_any({"title": "a"}).exclude_all({"status": "b"}).statement
    sql = render(stmt)
    assert "listings.title LIKE" in sql
    assert "listings.status NOT LIKE" in sql
    assert "ILIKE" not in sql


def test_empty_exclusion_keeps_statement():
    query = PatternQuery(select(Listing))
    assert query.exclude_all({"title": []}).statement.whereclause is None
