"""Unit tests for DomainCountModel

Test coverage includes:

1. Construction and equality
2. Immutability
3. Dictionary representation
"""

import dataclasses

import pytest

from urlshortener.models import DomainCountModel


def test_domain_count_model_equality():
    assert DomainCountModel('example.com', 2) == DomainCountModel(domain='example.com', count=2)
    assert DomainCountModel('example.com', 2) != DomainCountModel('example.com', 3)


def test_domain_count_model_is_frozen():
    model = DomainCountModel('example.com', 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        model.count = 3


def test_domain_count_model_to_dict():
    assert DomainCountModel('example.com', 2).to_dict() == {'domain': 'example.com', 'count': 2}
