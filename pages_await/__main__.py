"""Allow ``python -m pages_await``."""

from pages_await.main import main

raise SystemExit(main())
