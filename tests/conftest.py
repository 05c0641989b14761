from pathlib import Path

import pytest

from artex.domain.extractors import ExtractorFactory


@pytest.fixture(scope="session")
def repo_root() -> Path:
    """Resolve the repository root directory.

    Assumes tests live under <repo>/tests/.
    """
    return Path(__file__).resolve().parents[1]


@pytest.fixture(autouse=True)
def _preserve_extractor_registry():
    """Keep registry mutations made by one test from leaking into the next."""
    snapshot = ExtractorFactory.snapshot()
    yield
    ExtractorFactory.restore(snapshot)


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the user config layer at an empty directory.

    Tests must not pick up a developer's ~/.artex/config.yml.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home


@pytest.fixture
def greeter_response() -> str:
    """Single unfenced Java document, as an assistant might paste it."""
    return (
        "// src/app/Greeter.java\n"
        "package app;\n"
        "public class Greeter { }\n"
    )


@pytest.fixture
def mixed_response() -> str:
    """Assistant reply carrying Java, a React component and a style sheet."""
    return (
        "Here is the backend controller:\n"
        "\n"
        "```java\n"
        "// src/main/java/com/example/web/HelloController.java\n"
        "package com.example.web;\n"
        "\n"
        "@RestController\n"
        "public class HelloController {\n"
        "    @GetMapping(\"/hello\")\n"
        "    public String hello() { return \"hi\"; }\n"
        "}\n"
        "```\n"
        "\n"
        "And the component:\n"
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
        "Styles:\n"
        "\n"
        "```css\n"
        "/* src/index.css */\n"
        "@tailwind base;\n"
        "@tailwind components;\n"
        "\n"
        ".counter { color: red; }\n"
        "```\n"
    )
