"""Shared fixtures: a small bilingual content tree."""

from collections.abc import Callable
from pathlib import Path

import pytest
from carnet.config import CarnetConfig, ContentConfig, OutputConfig, SiteConfig

SAMPLE_POSTS: dict[str, str] = {
    "fr/2016-05-12-injection-de-dependances.md": """\
---
layout: post
title: "L'injection de dépendances"
date: 2016-05-12
category: architecture
lang: fr
ref: di
---

Passer les collaborateurs au constructeur plutôt que de les créer.

```python
class Service:
    def __init__(self, repo):
        self.repo = repo
```
""",
    "en/2016-05-12-dependency-injection.md": """\
---
layout: post
title: Dependency injection
date: 2016-05-12
category: architecture
lang: en
ref: di
---

Hand collaborators to the constructor instead of building them inside.
""",
    "fr/2017-03-02-les-pseudo-types.md": """\
---
layout: post
title: Les pseudo-types
date: 2017-03-02
category: typage
lang: fr
---

# Les pseudo-types

Un alias ne crée pas un nouveau type.
""",
    "en/2017-09-20-async-programming.md": """\
---
layout: post
title: "Async programming: a primer"
date: 2017-09-20 10:00:00 +0200
category: concurrency
lang: en
tags: [async, python]
---

Coroutines yield control at every await.
""",
    "en/2018-01-15-worker-pools.md": """\
---
layout: post
title: Worker pools
date: 2018-01-15
categories:
  - concurrency
  - patterns
lang: en
---

A fixed set of workers draining a shared queue.
""",
    "fr/2018-02-01-brouillon.md": """\
---
layout: post
title: Brouillon
date: 2018-02-01
category: typage
lang: fr
draft: true
---

Pas encore prêt.
""",
}


@pytest.fixture
def write_post(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a content file under ``tmp_path/_posts``."""

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / "_posts" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def posts_dir(tmp_path: Path, write_post: Callable[[str, str], Path]) -> Path:
    """A posts directory holding the sample bilingual posts."""
    for relative, content in SAMPLE_POSTS.items():
        write_post(relative, content)
    return tmp_path / "_posts"


@pytest.fixture
def site_config(tmp_path: Path, posts_dir: Path) -> CarnetConfig:
    """Config pointing at the sample posts, writing indexes under tmp_path."""
    return CarnetConfig(
        site=SiteConfig(base_url="https://blog.example"),
        content=ContentConfig(posts_dir=str(posts_dir)),
        output=OutputConfig(directory=str(tmp_path / "out")),
    )
