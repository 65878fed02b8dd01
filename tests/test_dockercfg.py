"""Unit tests for pull_secrets/dockercfg.py"""

import json

import pytest

from conftest import b64, make_secret
from pull_secrets.dockercfg import credentials_from_secret, decode_base64_secret, decode_dockercfg
from pull_secrets.errors import DecodeError, EmptyTokenError

SECRET_DATA_PAYLOAD = (
    '{"https://index.docker.io/v1/":{"username":"user-x","password":"pass-x",'
    '"email":"karolis.rusenas@gmail.com","auth":"somethinghere"}}'
)


class TestDecodeBase64Secret:
    """Tests for decode_base64_secret function"""

    def test_hello_there(self):
        """Literal token decodes to hello/there"""
        assert decode_base64_secret("aGVsbG86dGhlcmU=") == ("hello", "there")

    def test_hello_there_encoded(self):
        assert decode_base64_secret(b64("hello:there")) == ("hello", "there")

    def test_empty_token_raises(self):
        with pytest.raises(EmptyTokenError):
            decode_base64_secret("")

    def test_empty_token_is_decode_error(self):
        """EmptyTokenError can be handled as any other DecodeError"""
        with pytest.raises(DecodeError):
            decode_base64_secret("")

    def test_splits_on_first_colon(self):
        """Password may itself contain colons"""
        assert decode_base64_secret(b64("user:pa:ss:word")) == ("user", "pa:ss:word")

    def test_no_colon_is_username_only(self):
        assert decode_base64_secret(b64("justauser")) == ("justauser", "")

    def test_invalid_base64_raises(self):
        with pytest.raises(DecodeError):
            decode_base64_secret("not base64!!")

    def test_non_string_token_raises(self):
        with pytest.raises(DecodeError):
            decode_base64_secret(123)


class TestDecodeDockercfg:
    """Tests for decode_dockercfg function"""

    def test_direct_username_password(self):
        creds = decode_dockercfg(SECRET_DATA_PAYLOAD.encode())
        assert creds.username == "user-x"
        assert creds.password == "pass-x"

    def test_accepts_str_payload(self):
        creds = decode_dockercfg(SECRET_DATA_PAYLOAD)
        assert (creds.username, creds.password) == ("user-x", "pass-x")

    def test_auth_field_only(self):
        payload = json.dumps({"https://index.docker.io/v1/": {"auth": b64("user-y:pass-y")}})
        creds = decode_dockercfg(payload)
        assert (creds.username, creds.password) == ("user-y", "pass-y")

    def test_auth_field_used_when_password_missing(self):
        """Direct fields are only used when both are present"""
        payload = json.dumps({"registry.example.com": {"username": "ignored", "auth": b64("user-y:pass-y")}})
        creds = decode_dockercfg(payload)
        assert (creds.username, creds.password) == ("user-y", "pass-y")

    def test_dockerconfigjson_auths_wrapper(self):
        payload = json.dumps({"auths": {"registry.example.com": {"username": "myuser", "password": "mypassword"}}})
        creds = decode_dockercfg(payload)
        assert (creds.username, creds.password) == ("myuser", "mypassword")

    def test_first_entry_without_registry(self):
        payload = json.dumps({
            "first.example.com": {"username": "first", "password": "one"},
            "second.example.com": {"username": "second", "password": "two"},
        })
        assert decode_dockercfg(payload).username == "first"

    def test_prefers_matching_registry_host(self):
        payload = json.dumps({
            "first.example.com": {"username": "first", "password": "one"},
            "https://second.example.com/v2/": {"username": "second", "password": "two"},
        })
        assert decode_dockercfg(payload, registry="second.example.com").username == "second"

    def test_docker_hub_aliases_match(self):
        payload = json.dumps({
            "quay.io": {"username": "quay", "password": "q"},
            "https://index.docker.io/v1/": {"username": "hub", "password": "h"},
        })
        assert decode_dockercfg(payload, registry="docker.io").username == "hub"

    def test_falls_back_to_first_entry_when_no_host_matches(self):
        payload = json.dumps({"quay.io": {"username": "quay", "password": "q"}})
        assert decode_dockercfg(payload, registry="ghcr.io").username == "quay"

    def test_invalid_json_raises(self):
        with pytest.raises(DecodeError):
            decode_dockercfg(b"{not json")

    def test_non_object_raises(self):
        with pytest.raises(DecodeError):
            decode_dockercfg(b"[]")

    def test_no_registry_entries_raises(self):
        with pytest.raises(DecodeError):
            decode_dockercfg(b"{}")

    def test_empty_auths_raises(self):
        with pytest.raises(DecodeError):
            decode_dockercfg(json.dumps({"auths": {}}))

    def test_entry_without_credentials_raises(self):
        with pytest.raises(DecodeError):
            decode_dockercfg(json.dumps({"registry.example.com": {"email": "a@b.c"}}))

    def test_empty_auth_raises_empty_token(self):
        with pytest.raises(EmptyTokenError):
            decode_dockercfg(json.dumps({"registry.example.com": {"auth": ""}}))

    @pytest.mark.parametrize("auth", [123, True, ["dXNlcjpwYXNz"], {"user": "pass"}])
    def test_non_string_auth_raises(self, auth):
        with pytest.raises(DecodeError):
            decode_dockercfg(json.dumps({"registry.example.com": {"auth": auth}}))

    def test_null_auth_raises_empty_token(self):
        with pytest.raises(EmptyTokenError):
            decode_dockercfg(json.dumps({"registry.example.com": {"auth": None}}))

    def test_non_string_password_uses_auth(self):
        payload = json.dumps({
            "registry.example.com": {"username": "u", "password": 123, "auth": b64("user-y:pass-y")}
        })
        creds = decode_dockercfg(payload)
        assert (creds.username, creds.password) == ("user-y", "pass-y")

    @pytest.mark.parametrize("entry", [
        {"username": "u", "password": 123},
        {"username": 42, "password": "p"},
        {"username": ["u"], "password": {"p": 1}},
    ])
    def test_non_string_fields_without_auth_raise(self, entry):
        with pytest.raises(DecodeError):
            decode_dockercfg(json.dumps({"registry.example.com": entry}))


class TestCredentialsFromSecret:
    """Tests for credentials_from_secret function"""

    def test_decodes_dockercfg_secret(self):
        secret = make_secret(SECRET_DATA_PAYLOAD)
        creds = credentials_from_secret(secret)
        assert (creds.username, creds.password) == ("user-x", "pass-x")

    def test_reads_dockercfg_key(self):
        secret = make_secret(SECRET_DATA_PAYLOAD, key=".dockercfg")
        assert credentials_from_secret(secret).username == "user-x"

    def test_accepts_dockerconfigjson_type(self):
        secret = make_secret(
            {"auths": {"registry.example.com": {"auth": b64("myuser:mypassword")}}},
            secret_type="kubernetes.io/dockerconfigjson",
        )
        creds = credentials_from_secret(secret, registry="registry.example.com")
        assert (creds.username, creds.password) == ("myuser", "mypassword")

    def test_rejects_opaque_secret(self):
        secret = make_secret(SECRET_DATA_PAYLOAD, secret_type="Opaque")
        with pytest.raises(DecodeError):
            credentials_from_secret(secret)

    def test_rejects_secret_without_payload(self):
        secret = make_secret(SECRET_DATA_PAYLOAD, key="other-key")
        with pytest.raises(DecodeError):
            credentials_from_secret(secret)

    def test_rejects_secret_without_data(self):
        secret = make_secret(SECRET_DATA_PAYLOAD)
        secret.data = None
        with pytest.raises(DecodeError):
            credentials_from_secret(secret)

    def test_rejects_invalid_base64_data(self):
        secret = make_secret(SECRET_DATA_PAYLOAD)
        secret.data = {".dockerconfigjson": "%%%"}
        with pytest.raises(DecodeError):
            credentials_from_secret(secret)

    def test_custom_types_and_keys(self):
        secret = make_secret(SECRET_DATA_PAYLOAD, secret_type="Opaque", key="config.json")
        creds = credentials_from_secret(secret, secret_types=["Opaque"], data_keys=["config.json"])
        assert creds.username == "user-x"
