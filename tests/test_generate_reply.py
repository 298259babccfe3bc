"""
Tests for free-form replies: catalog lookup, text generation and the canned fallback.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

import pytest

from studio_bot.application.exceptions import TextGenerationUpstreamError
from studio_bot.application.ports.llm import TextGenerationPort
from studio_bot.application.use_cases.generate_reply import GenerateReplyUseCase
from studio_bot.application.use_cases.reply_composer import ReplyComposer
from studio_bot.domain.entities.service_catalog import CatalogEntry
from studio_bot.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from studio_bot.infrastructure.llm.mock_llm import MockTextGenerator

from conftest import SAMPLE_ENTRIES


class BrokenTextGenerator(TextGenerationPort):
    async def answer(self, question: str) -> str | None:
        raise TextGenerationUpstreamError("rate limited")


def make_use_case(llm: TextGenerationPort) -> GenerateReplyUseCase:
    return GenerateReplyUseCase(
        catalog=ServiceCatalogStore(SAMPLE_ENTRIES), llm=llm, composer=ReplyComposer(business_name="Test Studio")
    )


def test_catalog_prefers_longest_alias():
    catalog = ServiceCatalogStore(SAMPLE_ENTRIES)
    assert catalog.find("Cuánto cuesta la FOTO PARA VISA?").name == "US visa photo"
    assert catalog.find("do you print 8x10?").name == "Print 8x10"
    assert catalog.find("opening hours?") is None
    assert catalog.find("") is None


def test_catalog_from_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "catalog.json"
        path.write_text(
            json.dumps(
                {
                    "items": [
                        {"kind": "service", "name": "Diploma photo", "aliases": ["diploma"], "price": 8},
                        {"kind": "print", "aliases": ["nameless"]},
                    ]
                }
            ),
            encoding="utf-8",
        )
        catalog = ServiceCatalogStore.from_file(str(path))

        assert len(catalog) == 1
        assert catalog.find("diploma photos please").price == 8.0


def test_missing_catalog_file_is_empty():
    assert len(ServiceCatalogStore.from_file("/nonexistent/catalog.json")) == 0


@pytest.mark.asyncio
async def test_catalog_hit_skips_text_generation():
    llm = MockTextGenerator(answers={"visa": "should not be used"})
    reply = await make_use_case(llm).execute("visa photo price?")

    assert "US visa photo" in reply
    assert "⏱️ Duration: 10 minutes" in reply
    assert "📐 Size: 2x2 in" in reply
    assert llm.questions == []


@pytest.mark.asyncio
async def test_print_entry_format():
    reply = await make_use_case(MockTextGenerator()).execute("8x10 prints")
    assert reply.startswith("🖨️ *Print 8x10* (professional)")
    assert "$3.50" in reply


@pytest.mark.asyncio
async def test_text_generation_answer_is_used():
    llm = MockTextGenerator(answers={"parking": "Yes, there is free parking in front of the studio."})
    reply = await make_use_case(llm).execute("Is there parking?")
    assert reply == "Yes, there is free parking in front of the studio."


@pytest.mark.asyncio
async def test_text_generation_failure_falls_back():
    reply = await make_use_case(BrokenTextGenerator()).execute("Is there parking?")
    assert reply == ReplyComposer(business_name="Test Studio").fallback()


@pytest.mark.asyncio
async def test_no_answer_falls_back():
    reply = await make_use_case(MockTextGenerator()).execute("Is there parking?")
    assert reply == ReplyComposer(business_name="Test Studio").fallback()


def test_service_entry_shows_photo_count_and_dress_codes():
    entry = CatalogEntry(
        kind="service",
        name="Passport photo",
        price=6.0,
        photo_count="6",
        dress_code_women="Dark top, no large earrings",
        dress_code_men="Dark shirt",
    )
    reply = ReplyComposer(business_name="Test Studio").catalog_entry(entry)

    lines = reply.splitlines()
    assert "🖼️ Number of photos: 6" in lines
    assert "👗 Women: Dark top, no large earrings" in lines
    assert "🤵 Men: Dark shirt" in lines
    assert lines.index("🤵 Men: Dark shirt") < lines.index("Would you like to book? Send *5* and I'll guide you.")


def test_service_entry_without_dress_codes_omits_them():
    reply = ReplyComposer(business_name="Test Studio").catalog_entry(SAMPLE_ENTRIES[0])
    assert "Number of photos" not in reply
    assert "Women:" not in reply
    assert "Men:" not in reply


def test_catalog_from_file_reads_photo_count_and_dress_codes():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "catalog.json"
        path.write_text(
            json.dumps(
                {
                    "items": [
                        {
                            "kind": "service",
                            "name": "US visa photo",
                            "aliases": ["visa"],
                            "photo_count": 4,
                            "dress_code_women": "Hair behind the shoulders",
                            "dress_code_men": "No caps",
                        },
                        {"kind": "service", "name": "Diploma photo", "aliases": ["diploma"], "photo_count": ""},
                    ]
                }
            ),
            encoding="utf-8",
        )
        catalog = ServiceCatalogStore.from_file(str(path))

        visa = catalog.find("visa")
        assert visa.photo_count == "4"
        assert visa.dress_code_women == "Hair behind the shoulders"
        assert visa.dress_code_men == "No caps"
        assert catalog.find("diploma").photo_count is None


def test_shipped_catalog_has_visa_dress_codes():
    catalog = ServiceCatalogStore.from_file(str(Path(__file__).resolve().parent.parent / "catalog.json"))
    reply = ReplyComposer(business_name="Test Studio").catalog_entry(catalog.find("foto para visa"))
    assert "🖼️ Number of photos: 4" in reply
    assert "👗 Women:" in reply
    assert "🤵 Men:" in reply
