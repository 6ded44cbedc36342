"""
Document parsing and modification flows on top of the fallback router.
"""

import json

import pytest

from conftest import cfg, run
from servicebill.llms.errors import AllProvidersExhaustedError
from servicebill.llms.router import FallbackRouter
from servicebill.llms.types import Provider
from servicebill.schemas.document import DocumentType, ServiceDetails
from servicebill.services.modify_service import modify_document
from servicebill.services.parse_service import DocumentParseError, NoDetailsFoundError, parse_details
from servicebill.services.prompts import build_parse_prompt
from servicebill.utils.json_extract import extract_json_object

PARSED = {
    "vehicleNumber": "AP09 AB 1234",
    "customerName": "Ramesh",
    "carModel": "Swift",
    "items": [
        {"description": "oilfltr", "unitPrice": 350, "quantity": 1, "total": 350},
        {"description": "r&r Fr bumper", "unitPrice": "800", "quantity": "1", "total": None},
    ],
}


def router_answering(fakes, text, provider=Provider.GEMINI, model="gemini-2.5-flash"):
    fakes[provider].script = {model: text}
    return FallbackRouter([cfg(provider.value, model)], clients=fakes)


class TestExtractJsonObject:
    def test_finds_object_inside_code_fence(self):
        reply = "Sure!\n```json\n{\"a\": {\"b\": 1}}\n```\nDone."
        assert extract_json_object(reply) == {"a": {"b": 1}}

    def test_returns_none_without_braces(self):
        assert extract_json_object("no json here") is None

    def test_raises_on_broken_json(self):
        with pytest.raises(ValueError):
            extract_json_object("{\"a\": }")


class TestParseDetails:
    def test_parses_and_attributes_model(self, fakes):
        router = router_answering(fakes, "Here you go:\n" + json.dumps(PARSED))

        parsed = run(parse_details(router, "AP09 AB 1234 Ramesh Swift ...", DocumentType.INVOICE))

        assert parsed.provider == "gemini"
        assert parsed.model == "gemini-2.5-flash"
        assert parsed.details.customer_name == "Ramesh"
        assert [i.description for i in parsed.details.items] == ["oilfltr", "r&r Fr bumper"]
        assert parsed.details.items[1].unit_price == 800
        assert parsed.details.items[1].total == 0

    def test_prompt_carries_notes_type_and_schema(self, fakes):
        router = router_answering(fakes, json.dumps(PARSED))

        run(parse_details(router, "Lh rh door r&r 1200", DocumentType.QUOTATION))

        prompt = fakes[Provider.GEMINI].calls[0]["prompt"]
        assert "Lh rh door r&r 1200" in prompt
        assert "QUOTATION" in prompt
        assert "\"vehicleNumber\"" in prompt

    def test_empty_document_is_rejected(self, fakes):
        empty = {"vehicleNumber": "N/A", "customerName": "", "carModel": "not available", "items": []}
        router = router_answering(fakes, json.dumps(empty))

        with pytest.raises(NoDetailsFoundError):
            run(parse_details(router, "hello", DocumentType.RECEIPT))

    def test_reply_without_json_raises(self, fakes):
        router = router_answering(fakes, "I could not find any details.")

        with pytest.raises(DocumentParseError):
            run(parse_details(router, "hello"))

    def test_exhaustion_propagates(self, fakes):
        router = FallbackRouter([cfg("gemini", "g1", "")], clients=fakes)

        with pytest.raises(AllProvidersExhaustedError):
            run(parse_details(router, "hello"))

    def test_service_prompt_has_no_document_purpose(self):
        prompt = build_parse_prompt("x", DocumentType.SERVICE, ServiceDetails.model_json_schema())
        assert "to create" not in prompt


class TestModifyDocument:
    DOC = {"invoiceNumber": "2001", "customerName": "Ramesh", "items": []}

    def test_applies_change_and_keeps_number(self, fakes):
        reply = {
            "success": True,
            "message": "Added 2 wiper blades.",
            "document": {
                "invoiceNumber": "9999",
                "customerName": "Ramesh",
                "items": [{"description": "wiper blades", "unitPrice": 500, "quantity": 2, "total": 1000}],
            },
        }
        router = router_answering(fakes, json.dumps(reply), Provider.OPENAI, "gpt-4-turbo")

        result = run(modify_document(router, dict(self.DOC), "add 2 wiper blades for 500 each"))

        assert result.success is True
        assert result.message == "Added 2 wiper blades."
        assert result.document["invoiceNumber"] == "2001"
        assert result.document["items"][0]["total"] == 1000
        assert (result.provider, result.model) == ("openai", "gpt-4-turbo")

    def test_exhaustion_returns_original(self, fakes):
        router = FallbackRouter([cfg("gemini", "g1", "")], clients=fakes)

        result = run(modify_document(router, dict(self.DOC), "remove engine oil"))

        assert result.success is False
        assert result.document == self.DOC
        assert result.message.startswith("Failed to modify document details:")
        assert "gemini/g1: credential not configured" in result.message

    @pytest.mark.parametrize("reply", ["no json", "{\"broken\": ", "{\"success\": true}"])
    def test_unusable_reply_returns_original(self, fakes, reply):
        router = router_answering(fakes, reply)

        result = run(modify_document(router, dict(self.DOC), "remove engine oil"))

        assert result.success is False
        assert result.document == self.DOC

    def test_model_reported_failure_keeps_original(self, fakes):
        reply = {"success": False, "message": "Item not found.", "document": {"items": []}}
        router = router_answering(fakes, json.dumps(reply))

        result = run(modify_document(router, dict(self.DOC), "remove spark plugs"))

        assert result.success is False
        assert result.message == "Item not found."
        assert result.document == self.DOC

    @pytest.mark.parametrize("flag", ["false", "False", " no ", "0", 0])
    def test_quoted_failure_flag_keeps_original(self, fakes, flag):
        reply = {"success": flag, "message": "Item not found.", "document": {"items": []}}
        router = router_answering(fakes, json.dumps(reply))

        result = run(modify_document(router, dict(self.DOC), "remove spark plugs"))

        assert result.success is False
        assert result.document == self.DOC

    @pytest.mark.parametrize("flag", ["true", "yes", 1])
    def test_quoted_success_flag_applies_change(self, fakes, flag):
        reply = {"success": flag, "message": "Done.", "document": {"customerName": "Suresh", "items": []}}
        router = router_answering(fakes, json.dumps(reply))

        result = run(modify_document(router, dict(self.DOC), "rename customer to Suresh"))

        assert result.success is True
        assert result.document["customerName"] == "Suresh"
        assert result.document["invoiceNumber"] == "2001"
