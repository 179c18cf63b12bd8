"""
Tests for enum validation rules and payload transformation.
"""
import pytest
from dbenum import EnumIndexRule, EnumRule, EnumValueRule, EnumValidationError
from dbenum import InvalidEnumError, NotNullableError, nullable, transform_enums

from tests.fixtures.enums import ColorEnum, PriorityEnum, StatusEnum


class TestEnumRule:

    @pytest.mark.parametrize(('value', 'expected'), [
        ('Draft', True),
        (1, True),
        (StatusEnum.Archived, True),
        ('draft', False),
        (3, False),
        (None, False),
        (True, False),
        (ColorEnum.Red, False),
    ])
    def test_passes(self, value, expected):
        assert EnumRule(StatusEnum).passes('status', value) is expected

    def test_message(self):
        rule = EnumRule(StatusEnum)
        assert rule.message('status') == 'The status field is not a valid StatusEnum.'

    def test_shared_rule_reports_each_field(self):
        rule = EnumRule(StatusEnum)
        rule.passes('status', 'nope')
        rule.passes('previous_status', 'Draft')

        with pytest.raises(EnumValidationError) as exc_info:
            rule.validate('status', 'nope')
        assert exc_info.value.attribute == 'status'
        assert str(exc_info.value) == 'The status field is not a valid StatusEnum.'
        assert rule.message('previous_status') == 'The previous_status field is not a valid StatusEnum.'

    def test_validate(self):
        rule = EnumRule(PriorityEnum)
        rule.validate('priority', 'high')

        with pytest.raises(EnumValidationError) as exc_info:
            rule.validate('priority', 'urgent')
        assert exc_info.value.attribute == 'priority'
        assert 'PriorityEnum' in str(exc_info.value)

    def test_non_primitive_rejected(self):
        assert EnumRule(PriorityEnum).passes('priority', b'high') is False
        assert EnumRule(PriorityEnum).passes('priority', 1.0) is False

    def test_repr(self):
        assert repr(EnumValueRule(StatusEnum)) == 'EnumValueRule(StatusEnum)'


class TestEnumIndexRule:

    @pytest.mark.parametrize(('value', 'expected'), [
        (0, True),
        (2, True),
        (3, False),
        ('0', False),
        ('Draft', False),
        (False, False),
    ])
    def test_passes(self, value, expected):
        assert EnumIndexRule(StatusEnum).passes('status', value) is expected

    def test_message(self):
        rule = EnumIndexRule(StatusEnum)
        assert rule.message('status') == 'The status field is not a valid index of StatusEnum.'


class TestEnumValueRule:

    @pytest.mark.parametrize(('value', 'expected'), [
        ('green', True),
        ('Green', False),
        (0, False),
        ('purple', False),
    ], ids=['value', 'name_only', 'index', 'unknown'])
    def test_passes(self, value, expected):
        assert EnumValueRule(ColorEnum).passes('color', value) is expected

    def test_validate_message(self):
        with pytest.raises(EnumValidationError, match='not a valid value of ColorEnum'):
            EnumValueRule(ColorEnum).validate('color', 'Green')


class TestTransformEnums:

    def test_transforms_listed_keys(self):
        data = {'status': 'Published', 'priority': 1, 'title': 'x'}
        result = transform_enums(data, {
            'status': StatusEnum,
            'priority': PriorityEnum,
        })

        assert result == {'status': StatusEnum.Published, 'priority': PriorityEnum.HIGH, 'title': 'x'}
        assert data['status'] == 'Published'

    def test_accepts_mapping_specs(self):
        result = transform_enums(
            {'status': 'Archived', 'color': None},
            {'status': 'StatusEnum', 'color': 'tests.fixtures.enums.ColorEnum:nullable'})
        assert result == {'status': StatusEnum.Archived, 'color': None}

    def test_missing_keys_skipped(self):
        assert transform_enums({}, {'status': StatusEnum}) == {}

    def test_members_kept(self):
        result = transform_enums({'status': StatusEnum.Draft}, {'status': StatusEnum})
        assert result['status'] is StatusEnum.Draft

    def test_nullable_helper(self):
        assert transform_enums({'color': None}, {'color': nullable(ColorEnum)}) == {'color': None}

    def test_none_rejected_when_not_nullable(self):
        with pytest.raises(NotNullableError):
            transform_enums({'status': None}, {'status': StatusEnum})

    def test_unknown_value_propagates(self):
        with pytest.raises(ValueError, match='StatusEnum'):
            transform_enums({'status': 'Nope'}, {'status': StatusEnum})

    @pytest.mark.parametrize('value', [ColorEnum.Red, PriorityEnum.LOW], ids=['indexed', 'structural'])
    def test_foreign_enum_rejected(self, value):
        with pytest.raises(InvalidEnumError) as exc_info:
            transform_enums({'status': value}, {'status': StatusEnum})
        assert exc_info.value.key == 'status'
        assert exc_info.value.expected is StatusEnum
        assert exc_info.value.actual is type(value)
