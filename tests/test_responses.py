"""
Product Inventory API: Response Builder Tests
"""

import json
from decimal import Decimal

import pytest

from inventory.routes.responses import build_response


class TestBuildResponse:

    def test_envelope_shape(self):
        envelope = build_response(200, {"products": []})

        assert envelope == {
            "statusCode": 200,
            "headers": {"Content-Type": "application/json"},
            "body": '{"products": []}',
        }

    def test_none_body_is_empty(self):
        assert build_response(200)["body"] == ""

    def test_string_body_is_json_encoded(self):
        assert build_response(404, "404 Not Found")["body"] == '"404 Not Found"'

    def test_headers_are_not_shared(self):
        first = build_response(200)
        first["headers"]["X-Extra"] = "1"

        assert build_response(200)["headers"] == {"Content-Type": "application/json"}

    @pytest.mark.parametrize(
        "value, expected",
        [
            (Decimal("10"), 10),
            (Decimal("9.99"), 9.99),
            (Decimal("-3.0"), -3),
        ],
    )
    def test_decimals_become_numbers(self, value, expected):
        body = json.loads(build_response(200, {"price": value})["body"])

        assert body["price"] == expected
        assert type(body["price"]) is type(expected)

    def test_nested_decimals_and_sets(self):
        item = {"productId": "1", "sizes": {Decimal("2"), Decimal("1")}, "dims": [Decimal("1.5")]}

        body = json.loads(build_response(200, item)["body"])

        assert body == {"productId": "1", "sizes": [1, 2], "dims": [1.5]}

    def test_unserializable_value_raises(self):
        with pytest.raises(TypeError):
            build_response(200, {"x": object()})
