"""Tests for secretvault.vault.validation — payload shape rules (pure unit tests)."""

from secretvault.vault.validation import (
    BODY_ERROR,
    DETAILS_ERROR,
    NAME_ERROR,
    TYPE_ERROR,
    validate_secret,
)


def _payload(**overrides):
    payload = {"type": "credential", "name": "Example", "details": {"username": "alice"}}
    payload.update(overrides)
    return payload


class TestValidateCreate:
    def test_valid_payload(self):
        assert validate_secret(_payload()) == []

    def test_all_types_accepted(self):
        for secret_type in ("credential", "sshKey", "creditCard", "misc"):
            assert validate_secret(_payload(type=secret_type)) == []

    def test_unknown_type_names_enumeration(self):
        errors = validate_secret(_payload(type="bogus"))
        assert errors == [TYPE_ERROR]
        assert "credential, sshKey, creditCard, misc" in errors[0]

    def test_type_is_case_sensitive(self):
        assert validate_secret(_payload(type="SSHKEY")) == [TYPE_ERROR]

    def test_empty_name_rejected(self):
        assert validate_secret(_payload(name="")) == [NAME_ERROR]

    def test_non_string_name_rejected(self):
        assert validate_secret(_payload(name=42)) == [NAME_ERROR]

    def test_details_must_be_object(self):
        for bad in ([], None, "text", 3, True):
            assert validate_secret(_payload(details=bad)) == [DETAILS_ERROR]

    def test_empty_details_allowed(self):
        assert validate_secret(_payload(details={})) == []

    def test_details_contents_not_checked(self):
        """A credential with a numeric password is accepted; details are free-form."""
        assert validate_secret(_payload(details={"password": 1234, "nested": {"a": [1]}})) == []

    def test_missing_everything_collects_all_errors(self):
        assert validate_secret({}) == [TYPE_ERROR, NAME_ERROR, DETAILS_ERROR]

    def test_non_object_body(self):
        assert validate_secret(["credential"]) == [BODY_ERROR]
        assert validate_secret(None) == [BODY_ERROR]


class TestValidateUpdate:
    def test_empty_update_ok(self):
        assert validate_secret({}, is_update=True) == []

    def test_partial_name_only(self):
        assert validate_secret({"name": "Renamed"}, is_update=True) == []

    def test_present_fields_validated(self):
        assert validate_secret({"type": "bogus"}, is_update=True) == [TYPE_ERROR]
        assert validate_secret({"name": ""}, is_update=True) == [NAME_ERROR]
        assert validate_secret({"details": []}, is_update=True) == [DETAILS_ERROR]

    def test_null_counts_as_present(self):
        errors = validate_secret({"type": None, "name": None, "details": None}, is_update=True)
        assert errors == [TYPE_ERROR, NAME_ERROR, DETAILS_ERROR]

    def test_unrelated_keys_ignored(self):
        assert validate_secret({"id": "x", "createdAt": "whenever"}, is_update=True) == []

    def test_type_change_does_not_check_details(self):
        assert validate_secret({"type": "creditCard"}, is_update=True) == []
