"""
Shared pytest fixtures
"""

import os
import sys

import pytest

# Project root on sys.path for runs without an editable install
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from bomgraph.ontology import KnowledgeGraph, build_schema


@pytest.fixture(scope="session")
def schema():
    """Default schema (built once for the session)"""
    return build_schema()


@pytest.fixture
def graph(schema):
    """Empty schema-checked graph"""
    return KnowledgeGraph(schema)
