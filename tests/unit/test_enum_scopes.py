"""
Tests for query scope normalization.

The builder is a mock so each test can check the exact predicate call, or
that no call happened at all.
"""
from unittest.mock import MagicMock

import pytest
from dbenum import InvalidEnumError, NoSuchEnumField

from tests.fixtures.enums import ColorEnum, PriorityEnum, StatusEnum

SCOPES = [
    ('scope_where_enum', 'where_in'),
    ('scope_or_where_enum', 'or_where_in'),
    ('scope_where_not_enum', 'where_not_in'),
    ('scope_or_where_not_enum', 'or_where_not_in'),
]


@pytest.fixture
def builder():
    return MagicMock(name='builder')


@pytest.mark.parametrize(('scope', 'method'), SCOPES, ids=[s for s, _ in SCOPES])
def test_scope_calls_builder_method(post, builder, scope, method):
    getattr(post, scope)(builder, 'status', [StatusEnum.Draft, 'Published'])

    getattr(builder, method).assert_called_once_with('status', ['Draft', 'Published'])
    assert len(builder.method_calls) == 1


@pytest.mark.parametrize(('scope', 'method'), SCOPES, ids=[s for s, _ in SCOPES])
def test_scope_unknown_field(post, builder, scope, method):
    with pytest.raises(NoSuchEnumField) as exc_info:
        getattr(post, scope)(builder, 'titel', 'Draft')

    assert exc_info.value.key == 'titel'
    assert exc_info.value.model == 'Post'
    assert 'titel' in str(exc_info.value)
    assert 'Post' in str(exc_info.value)
    assert builder.method_calls == []


def test_scope_unmapped_real_column(post, builder):
    with pytest.raises(NoSuchEnumField):
        post.scope_where_enum(builder, 'title', 'Draft')
    assert builder.method_calls == []


@pytest.mark.parametrize(('candidates', 'expected'), [
    (StatusEnum.Published, ['Published']),
    ('Published', ['Published']),
    (1, ['Published']),
    ([StatusEnum.Draft, 'Published', 2], ['Draft', 'Published', 'Archived']),
    ((StatusEnum.Archived,), ['Archived']),
    ([], []),
], ids=['member', 'value', 'index', 'mixed_list', 'tuple', 'empty'])
def test_scope_string_storage(post, builder, candidates, expected):
    post.scope_where_enum(builder, 'status', candidates)
    builder.where_in.assert_called_once_with('status', expected)


@pytest.mark.parametrize(('candidates', 'expected'), [
    (StatusEnum.Published, [1]),
    ('Published', [1]),
    ([StatusEnum.Draft, 'Archived'], [0, 2]),
], ids=['member', 'value', 'mixed_list'])
def test_scope_integer_storage(post, builder, candidates, expected):
    post.scope_where_enum(builder, 'status_index', candidates)
    builder.where_in.assert_called_once_with('status_index', expected)


def test_scope_structural_enumerable(post, builder):
    post.scope_where_not_enum(builder, 'priority', [PriorityEnum.HIGH, 'low'])
    builder.where_not_in.assert_called_once_with('priority', [1, 0])


def test_scope_returns_builder_result(post, builder):
    result = post.scope_where_enum(builder, 'status', 'Draft')
    assert result is builder.where_in.return_value


def test_scope_nullable_none(post, builder):
    post.scope_where_enum(builder, 'nullable_status', [None, 'Draft'])
    builder.where_in.assert_called_once_with('nullable_status', [None, 'Draft'])


def test_scope_non_nullable_none_fails_before_builder(post, builder):
    with pytest.raises(ValueError):
        post.scope_where_enum(builder, 'status', ['Draft', None])
    assert builder.method_calls == []


def test_scope_unrecognized_value_fails_before_builder(post, builder):
    with pytest.raises(ValueError):
        post.scope_or_where_enum(builder, 'status', ['Draft', 'Unknown'])
    assert builder.method_calls == []


def test_scope_wrong_enum_type(post, builder):
    with pytest.raises(InvalidEnumError) as exc_info:
        post.scope_where_enum(builder, 'status', [ColorEnum.Red])
    assert exc_info.value.expected is StatusEnum
    assert exc_info.value.actual is ColorEnum
    assert builder.method_calls == []


def test_scope_accepts_generator(post, builder):
    post.scope_where_enum(builder, 'status', (s for s in ('Draft', 'Archived')))
    builder.where_in.assert_called_once_with('status', ['Draft', 'Archived'])


if __name__ == '__main__':
    __import__('pytest').main([__file__])
