"""Shared fixtures: a small interview-notes repository written to tmp_path."""

from pathlib import Path

import pytest

from notelint.core.config import Config
from notelint.core.repository import NotesRepository


ROOT_README = """\
# Interview Notes

- [Laravel](./Laravel/README.md)
- [PHP](PHP/)
"""

LARAVEL_README = """\
# Laravel

- [Interview Questions](./Interview_Questions.md)
  - [What is middleware?](./Interview_Questions.md#what-is-middleware)
  - [Accessors & Mutators](./Interview_Questions.md#accessors--mutators)
"""

LARAVEL_QUESTIONS = """\
# Laravel Interview Questions

<!-- toc -->

- [What is middleware?](#what-is-middleware)
- [Accessors & Mutators](#accessors--mutators)
  - [Example](#example)
- [미들웨어란?](#미들웨어란)

<!-- tocstop -->

## What is middleware?

Middleware filters HTTP requests entering the application.

```php
Route::get('/profile', fn () => 'ok')->middleware('auth');
```

## Accessors & Mutators

Accessors format attribute values when they are retrieved.

### Example

```php
public function getNameAttribute($value)
{
    return ucfirst($value);
}
```

## 미들웨어란?

요청을 필터링하는 계층입니다.
"""

PHP_README = """\
# PHP

## What is a closure?

An anonymous function that can capture variables.

```php
$greet = function ($name) { return "Hi $name"; };
```

See also [Laravel middleware](../Laravel/Interview_Questions.md#what-is-middleware).
"""


def write(root: Path, relative: str, text: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def config():
    config = Config()
    config.NOTES_ROOT = "."
    config.INDEX_FILE_NAME = "README.md"
    config.MARKDOWN_EXTENSIONS = [".md", ".markdown"]
    config.IGNORE_PATTERNS = [".git", "node_modules"]
    config.QUESTION_MIN_LEVEL = 2
    config.TOC_MIN_LEVEL = 2
    config.TOC_MAX_LEVEL = 3
    config.DISABLED_RULES = []
    config.SHOW_PROGRESS = False
    config.MIN_SCORE = 0.0
    config.TITLE_WEIGHT = 0.6
    config.CONTENT_WEIGHT = 0.4
    return config


@pytest.fixture
def notes_root(tmp_path: Path) -> Path:
    write(tmp_path, "README.md", ROOT_README)
    write(tmp_path, "Laravel/README.md", LARAVEL_README)
    write(tmp_path, "Laravel/Interview_Questions.md", LARAVEL_QUESTIONS)
    write(tmp_path, "PHP/README.md", PHP_README)
    return tmp_path


@pytest.fixture
def repository(notes_root: Path, config) -> NotesRepository:
    repository = NotesRepository(str(notes_root), config=config, show_progress=False)
    repository.load()
    return repository
