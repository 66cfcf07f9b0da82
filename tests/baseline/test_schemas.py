"""Tests for rgsclient.engine.schemas: status code helpers."""

import pytest

from rgsclient.engine.schemas import STATUS_DESCRIPTIONS, StatusCode, isSuccess, statusCodeOf


class TestStatusCode:
    def test_closed_set(self):
        assert {c.value for c in StatusCode} == {
            "SUCCESS", "ERR_SCR", "ERR_OPT", "ERR_IPB", "ERR_IS", "ERR_ATE",
            "ERR_GLE", "ERR_BNF", "ERR_BE", "ERR_UE", "ERR_GE",
        }

    def test_every_code_described(self):
        assert set(STATUS_DESCRIPTIONS) == set(StatusCode)

    def test_compares_as_string(self):
        assert StatusCode.ERR_IPB == "ERR_IPB"

    def test_description(self):
        assert StatusCode.ERR_IPB.description == "Insufficient player balance"


class TestStatusCodeOf:
    def test_known(self):
        assert statusCodeOf({"status": {"statusCode": "ERR_IS"}}) is StatusCode.ERR_IS

    def test_unknown_code_returned_raw(self):
        assert statusCodeOf({"status": {"statusCode": "ERR_NEW"}}) == "ERR_NEW"

    @pytest.mark.parametrize("response", [
        {},
        {"status": None},
        {"status": "SUCCESS"},
        {"status": {}},
        {"url": "https://game"},
    ])
    def test_absent(self, response):
        assert statusCodeOf(response) is None


class TestIsSuccess:
    def test_success(self):
        assert isSuccess({"status": {"statusCode": "SUCCESS"}})

    def test_domain_error(self):
        assert not isSuccess({"status": {"statusCode": "ERR_GLE"}})

    def test_no_status_is_not_success(self):
        """Success is never inferred from the shape of the body alone."""
        assert not isSuccess({"balance": {"amount": 1, "currency": "USD"}})
