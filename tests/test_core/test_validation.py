"""
Tests for identifier and payload validation.
"""

from datetime import date

import pytest

from usergroups.core.user import Sex
from usergroups.core.validation import (
    ERROR_GROUP_ID,
    ERROR_USER_ID,
    InvalidIdentifier,
    ValidationError,
    validate_create_payload,
    validate_group_id,
    validate_group_payload,
    validate_group_update_payload,
    validate_identifier,
    validate_membership_payload,
    validate_update_payload,
    validate_user_id,
)

VALID_USER = {
    "name": "Ada",
    "surname": "Lovelace",
    "birth_date": "1815-12-10",
    "sex": "female",
}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1", 1),
        ("42", 42),
        ("007", 7),
        ("12abc", 12),
        ("3.9", 3),
        ("  15", 15),
        ("-4", -4),
        ("+8", 8),
        (5, 5),
    ],
)
def test_identifier_leading_prefix(raw, expected):
    assert validate_identifier(raw, message="bad") == expected


@pytest.mark.parametrize("raw", ["", "abc", "x12", "-", " ", None, True])
def test_identifier_rejects_non_numeric(raw):
    with pytest.raises(InvalidIdentifier) as excinfo:
        validate_identifier(raw, message="bad")

    assert excinfo.value.message == "bad"


@pytest.mark.parametrize("raw", ["\u0663", "\uff11\uff12", "\u0661abc"])
def test_identifier_rejects_non_ascii_digits(raw):
    with pytest.raises(InvalidIdentifier):
        validate_identifier(raw, message="bad")


def test_identifier_range():
    assert validate_identifier(str(2**63 - 1), message="bad") == 2**63 - 1
    assert validate_identifier(str(-(2**63)), message="bad") == -(2**63)

    for raw in [str(2**63), str(-(2**63) - 1), "99999999999999999999", 2**70]:
        with pytest.raises(InvalidIdentifier):
            validate_identifier(raw, message="bad")


def test_user_and_group_id_messages():
    with pytest.raises(InvalidIdentifier, match=ERROR_USER_ID):
        validate_user_id("abc")

    with pytest.raises(InvalidIdentifier, match=ERROR_GROUP_ID):
        validate_group_id("abc")

    assert ERROR_USER_ID == "Error User ID is not valid"
    assert ERROR_GROUP_ID == "Error Group ID is not valid"
    assert issubclass(InvalidIdentifier, ValidationError)


def test_create_payload_valid():
    content = validate_create_payload(VALID_USER)

    assert content.name == "Ada"
    assert content.surname == "Lovelace"
    assert content.birth_date == date(1815, 12, 10)
    assert content.sex is Sex.female


@pytest.mark.parametrize("sex", ["male", "female", "other"])
def test_create_payload_accepts_every_sex(sex):
    assert validate_create_payload({**VALID_USER, "sex": sex}).sex.value == sex


@pytest.mark.parametrize("sex", ["Male", "unknown", "", 1, None])
def test_create_payload_rejects_other_sex(sex):
    with pytest.raises(ValidationError) as excinfo:
        validate_create_payload({**VALID_USER, "sex": sex})

    assert excinfo.value.message == '"sex" must be one of [male, female, other]'


@pytest.mark.parametrize("field", ["name", "surname", "birth_date", "sex"])
def test_create_payload_missing_field(field):
    body = {k: v for k, v in VALID_USER.items() if k != field}

    with pytest.raises(ValidationError) as excinfo:
        validate_create_payload(body)

    assert excinfo.value.message == f'"{field}" is required'


def test_create_payload_reports_first_offending_field():
    with pytest.raises(ValidationError) as excinfo:
        validate_create_payload({"sex": "nope"})

    assert excinfo.value.message == '"name" is required'


def test_create_payload_wrong_types():
    with pytest.raises(ValidationError, match='"name" must be a string'):
        validate_create_payload({**VALID_USER, "name": 12})

    with pytest.raises(ValidationError, match='"name" is not allowed to be empty'):
        validate_create_payload({**VALID_USER, "name": ""})

    with pytest.raises(ValidationError, match='"birth_date" must be a valid date'):
        validate_create_payload({**VALID_USER, "birth_date": "not a date"})


def test_create_payload_rejects_unknown_keys():
    with pytest.raises(ValidationError, match='"age" is not allowed'):
        validate_create_payload({**VALID_USER, "age": 30})


@pytest.mark.parametrize("body", [None, [], "user", 3])
def test_create_payload_must_be_object(body):
    with pytest.raises(ValidationError, match="must be of type object"):
        validate_create_payload(body)


def test_update_payload_empty_is_valid():
    content = validate_update_payload({})

    assert content.model_dump(exclude_unset=True) == {}


def test_update_payload_partial():
    content = validate_update_payload({"surname": "Byron"})

    assert content.model_dump(exclude_unset=True) == {"surname": "Byron"}


def test_update_payload_typing():
    with pytest.raises(ValidationError, match='"sex" must be one of'):
        validate_update_payload({"sex": "robot"})

    with pytest.raises(ValidationError, match='"name" must be a string'):
        validate_update_payload({"name": None})

    with pytest.raises(ValidationError, match='"birth_date" must be a valid date'):
        validate_update_payload({"birth_date": "yesterday"})


def test_group_payloads():
    assert validate_group_payload({"name": "admins"}).name == "admins"

    with pytest.raises(ValidationError, match='"name" is required'):
        validate_group_payload({})

    assert validate_group_update_payload({}).model_dump(exclude_unset=True) == {}


def test_membership_payload():
    assert validate_membership_payload({"userId": 3}) == 3
    assert validate_membership_payload({"userId": "4"}) == 4

    for body in [{}, {"userId": "abc"}, None, {"userId": None}]:
        with pytest.raises(InvalidIdentifier, match=ERROR_USER_ID):
            validate_membership_payload(body)
