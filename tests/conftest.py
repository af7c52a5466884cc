import sys
from pathlib import Path

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


VALID_RULE = """---
title: Use Promise.all for Independent Operations
impact: CRITICAL
impactDescription: 2-10x improvement
tags: async, parallelization, promises
---

## Use Promise.all for Independent Operations

**Impact: CRITICAL (2-10x improvement)**

When async operations have no interdependencies, execute them concurrently.

**Incorrect (sequential execution):**

```typescript
const user = await fetchUser()
const posts = await fetchPosts()
```

**Correct (parallel execution):**

```typescript
const [user, posts] = await Promise.all([fetchUser(), fetchPosts()])
```

Reference: [MDN Promise.all](https://developer.mozilla.org/docs/Web/JavaScript/Reference/Global_Objects/Promise/all)
"""


@pytest.fixture
def valid_rule_text() -> str:
    return VALID_RULE


@pytest.fixture
def rules_dir(tmp_path: Path) -> Path:
    path = tmp_path / "rules"
    path.mkdir()
    return path


@pytest.fixture
def write_rule(rules_dir: Path):
    def _write(name: str, text: str) -> Path:
        path = rules_dir / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def skills_dir(tmp_path: Path) -> Path:
    path = tmp_path / "skills"
    path.mkdir()
    return path


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
