import logging
from unittest.mock import MagicMock

import pytest

from artex.application.config_models import ArtexConfig
from artex.application.extraction_orchestrator import ExtractionOrchestrator
from artex.domain.errors import ExtractorError
from artex.domain.extractors import CssExtractor, JavaExtractor, ReactExtractor
from artex.domain.models.artifact import Artifact


class ExplodingExtractor(JavaExtractor):
    """Claims every input and fails while extracting."""

    KIND_ID = "Exploding"

    def can_handle(self, text: str) -> bool:
        return True

    def extract(self, text: str) -> list[Artifact]:
        raise ExtractorError("pattern state corrupted")


class PickyExtractor(JavaExtractor):
    """Fails inside its applicability check."""

    KIND_ID = "Picky"

    def can_handle(self, text: str) -> bool:
        raise RuntimeError("cannot decide")


CONFLICT_TEXT = (
    ".button { color: red; }\n"
    "\n"
    "export default function App() { return <div className=\"app\" />; }\n"
)


@pytest.fixture
def orchestrator() -> ExtractionOrchestrator:
    return ExtractionOrchestrator()


def test_default_uses_registered_extractors(orchestrator):
    assert orchestrator.producer_ids == ["Java", "React/TypeScript", "TypeScript", "CSS", "HTML"]


def test_from_config_respects_order():
    cfg = ArtexConfig(extractors=["CSS", "Java"])
    assert ExtractionOrchestrator.from_config(cfg).producer_ids == ["CSS", "Java"]


def test_from_config_unknown_extractor_raises():
    cfg = ArtexConfig(extractors=["Java", "Cobol"])
    with pytest.raises(KeyError, match="Cobol"):
        ExtractionOrchestrator.from_config(cfg)


class TestExtractAll:
    def test_greeter_end_to_end(self, orchestrator, greeter_response):
        outcome = orchestrator.extract_all(greeter_response)

        assert len(outcome.all_artifacts) == 1
        a = outcome.all_artifacts[0]
        assert a.path == "src/app/Greeter.java"
        assert a.valid is True
        assert a.producer == "Java"
        assert outcome.succeeded is True
        assert outcome.errors == {}
        assert outcome.source_length == len(greeter_response)

    def test_no_applicable_extractor(self, orchestrator):
        outcome = orchestrator.extract_all("Thanks, that is all for now.")

        assert outcome.all_artifacts == ()
        assert outcome.by_producer == {}
        assert outcome.errors == {}
        assert outcome.succeeded is False

    def test_applicable_but_empty_producer_is_present(self, orchestrator):
        # Java claims the text ("public class ") but finds no path comment.
        outcome = orchestrator.extract_all("public class Greeter { }")

        assert outcome.by_producer == {"Java": ()}
        assert outcome.succeeded is False

    def test_extractor_failure_is_isolated(self, greeter_response):
        orchestrator = ExtractionOrchestrator(
            [ExplodingExtractor(), JavaExtractor(), CssExtractor()]
        )

        outcome = orchestrator.extract_all(greeter_response)

        assert [a.producer for a in outcome.all_artifacts] == ["Java"]
        assert outcome.errors == {"Exploding": "ExtractorError: pattern state corrupted"}
        assert "Exploding" not in outcome.by_producer
        assert outcome.failed_producers == ["Exploding"]

    def test_failure_is_logged(self, greeter_response, caplog):
        orchestrator = ExtractionOrchestrator([ExplodingExtractor()])

        with caplog.at_level(logging.ERROR):
            orchestrator.extract_all(greeter_response)

        assert "Error in extractor Exploding" in caplog.text

    def test_can_handle_failure_is_recorded(self, greeter_response):
        outcome = ExtractionOrchestrator([PickyExtractor(), JavaExtractor()]).extract_all(
            greeter_response
        )

        assert outcome.errors == {"Picky": "RuntimeError: cannot decide"}
        assert outcome.valid_count == 1

    def test_order_is_registration_then_match(self, mixed_response):
        outcome = ExtractionOrchestrator(
            [CssExtractor(), ReactExtractor(), JavaExtractor()]
        ).extract_all(mixed_response)

        assert [a.producer for a in outcome.all_artifacts] == ["CSS", "React/TypeScript", "Java"]
        assert list(outcome.by_producer) == ["CSS", "React/TypeScript", "Java"]

    def test_by_producer_matches_all_artifacts(self, orchestrator, mixed_response):
        outcome = orchestrator.extract_all(mixed_response)

        flattened = [a for found in outcome.by_producer.values() for a in found]
        assert flattened == list(outcome.all_artifacts)
        assert all(x is y for x, y in zip(flattened, outcome.all_artifacts))

    def test_mock_extractor_results_are_collected_unchanged(self):
        artifact = Artifact(path="x.mock", content="x", kind="Mock", producer="Mock")
        mock = MagicMock()
        mock.kind_id.return_value = "Mock"
        mock.can_handle.return_value = True
        mock.extract.return_value = [artifact]

        outcome = ExtractionOrchestrator([mock]).extract_all("anything")

        mock.can_handle.assert_called_once_with("anything")
        mock.extract.assert_called_once_with("anything")
        assert outcome.all_artifacts[0] is artifact

    def test_extract_skipped_when_not_applicable(self):
        mock = MagicMock()
        mock.kind_id.return_value = "Mock"
        mock.can_handle.return_value = False

        outcome = ExtractionOrchestrator([mock]).extract_all("anything")

        mock.extract.assert_not_called()
        assert outcome.by_producer == {}


class TestExtractWith:
    def test_unknown_producer(self, orchestrator):
        outcome = orchestrator.extract_with("public class A {}", "NoSuchKind")

        assert outcome.all_artifacts == ()
        assert list(outcome.errors) == ["Manager"]
        assert "NoSuchKind" in outcome.errors["Manager"]
        assert "Available extractors: Java" in outcome.errors["Manager"]

    def test_lookup_is_case_insensitive(self, orchestrator, greeter_response):
        outcome = orchestrator.extract_with(greeter_response, "java")

        assert outcome.valid_count == 1
        assert list(outcome.by_producer) == ["Java"]

    def test_bypasses_can_handle(self):
        mock = MagicMock()
        mock.kind_id.return_value = "Mock"
        mock.can_handle.return_value = False
        mock.extract.return_value = []

        outcome = ExtractionOrchestrator([mock]).extract_with("text", "Mock")

        mock.can_handle.assert_not_called()
        mock.extract.assert_called_once_with("text")
        assert outcome.by_producer == {"Mock": ()}

    def test_forced_extractor_on_unclaimed_content(self, orchestrator):
        # Bare declarations next to a hook call are left to React.
        text = "export interface P {}\nconst [a] = useState(0);\n"
        assert "TypeScript" not in orchestrator.detect_applicable(text)

        outcome = orchestrator.extract_with(text, "typescript")

        assert outcome.all_artifacts == ()
        assert outcome.by_producer == {"TypeScript": ()}

    def test_forced_extractor_rejects_component_segment(self, orchestrator):
        text = "// src/hooks.ts\nexport const x = useState(0);\n"

        outcome = orchestrator.extract_with(text, "typescript")

        assert [a.path for a in outcome.all_artifacts] == ["src/hooks.ts"]
        assert outcome.all_artifacts[0].valid is False

    def test_failure_is_reported_not_raised(self):
        outcome = ExtractionOrchestrator([ExplodingExtractor()]).extract_with("x", "Exploding")

        assert outcome.all_artifacts == ()
        assert outcome.errors == {"Exploding": "ExtractorError: pattern state corrupted"}


class TestDetectApplicable:
    def test_conflict_detection(self, orchestrator):
        assert orchestrator.detect_applicable(CONFLICT_TEXT) == ["React/TypeScript", "CSS"]

    def test_disjoint_component_blob(self, orchestrator):
        text = (
            "export default function Counter() {\n"
            "  const [count, setCount] = useState(0);\n"
            "  return <span>{count}</span>;\n"
            "}\n"
        )
        assert "TypeScript" not in orchestrator.detect_applicable(text)
        assert "React/TypeScript" in orchestrator.detect_applicable(text)

    def test_nothing_applicable(self, orchestrator):
        assert orchestrator.detect_applicable("hello") == []

    def test_component_and_types_fences_in_one_reply(self, orchestrator):
        text = (
            "The component:\n"
            "\n"
            "```tsx\n"
            "// src/components/Counter.tsx\n"
            "import React, { useState } from 'react';\n"
            "\n"
            "export default function Counter() {\n"
            "  const [count, setCount] = useState(0);\n"
            "  return <button onClick={() => setCount(count + 1)}>{count}</button>;\n"
            "}\n"
            "```\n"
            "\n"
            "And its types:\n"
            "\n"
            "```ts\n"
            "// src/types/user.ts\n"
            "export interface User {\n"
            "  id: number;\n"
            "  name: string;\n"
            "}\n"
            "```\n"
        )
        assert orchestrator.detect_applicable(text) == ["React/TypeScript", "TypeScript"]

        outcome = orchestrator.extract_all(text)

        assert [(a.producer, a.path) for a in outcome.all_artifacts] == [
            ("React/TypeScript", "src/components/Counter.tsx"),
            ("TypeScript", "src/types/user.ts"),
        ]
        assert outcome.invalid_count == 0

    def test_java_ternary_is_not_a_style_sheet(self, orchestrator):
        text = (
            "```java\n"
            "// src/main/java/com/x/Picker.java\n"
            "package com.x;\n"
            "\n"
            "public class Picker {\n"
            "    String a = \"a\";\n"
            "    String b = \"b\";\n"
            "\n"
            "    String pick(boolean f) { return f ? a : b; }\n"
            "}\n"
            "```\n"
        )
        assert orchestrator.detect_applicable(text) == ["Java"]

    def test_failing_check_is_skipped(self, greeter_response):
        orchestrator = ExtractionOrchestrator([PickyExtractor(), JavaExtractor()])
        assert orchestrator.detect_applicable(greeter_response) == ["Java"]


def test_describe_extractors(orchestrator):
    descriptions = orchestrator.describe_extractors()

    assert [d.producer_id for d in descriptions] == orchestrator.producer_ids
    java = descriptions[0]
    assert java.suffixes == [".java"]
    assert java.implementation_name == "JavaExtractor"
    assert java.fence_tags == ["java"]
    ts = descriptions[2]
    assert ts.suffixes == [".d.ts", ".ts"]


def test_describe_extractors_reads_metadata():
    orchestrator = ExtractionOrchestrator([CssExtractor()])

    (css,) = orchestrator.describe_extractors()
    meta = CssExtractor.get_metadata()

    assert css.producer_id == meta["name"]
    assert css.description == meta["description"]
    assert css.fence_tags == meta["fence_tags"]
