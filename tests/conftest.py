import json
import os

import pytest


SAMPLE_DOCUMENT = {
    "version": 3,
    "source": "svelte.dev",
    "blocks": [
        {"content": "Runes are symbols.", "breadcrumbs": ["Docs", "Svelte", "Runes", "What are runes?"], "href": "/docs/svelte/what-are-runes"},
        {"content": "let count = $state(0);", "breadcrumbs": ["Docs", "Svelte", "Runes", "$state"], "href": "/docs/svelte/$state"},
        {"content": "", "breadcrumbs": ["Docs", "Svelte", "Runes", "$derived"], "href": "/docs/svelte/$derived"},
        {"content": "Use <svelte:window>.", "breadcrumbs": "Docs > Svelte > Special elements > <svelte:window>"},
        {"content": "Old stuff.", "breadcrumbs": ["Docs", "Svelte", "Legacy APIs", "Overview"], "href": "/docs/svelte/legacy-overview"},
        {"content": "Routing basics.", "breadcrumbs": ["Docs", "SvelteKit", "Core concepts", "Routing"], "href": "/docs/kit/routing"},
        {"content": "Step one.", "breadcrumbs": ["Tutorial", "Basic Svelte", "Introduction", "Welcome"], "href": "/tutorial/svelte/welcome"},
        {"content": "Orphan", "breadcrumbs": ["Docs", "Svelte"]},
        {"content": "No crumbs at all"},
        {"breadcrumbs": ["Docs", "Svelte", "Runes", "$effect"]},
    ],
}


@pytest.fixture
def sample_document():
    return json.loads(json.dumps(SAMPLE_DOCUMENT))


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Empty working directory the CLIs run in."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def content_file(workdir, sample_document):
    path = workdir / "content.json"
    path.write_text(json.dumps(sample_document, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def umask_022():
    old = os.umask(0o022)
    try:
        yield
    finally:
        os.umask(old)
