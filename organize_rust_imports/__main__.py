from __future__ import annotations

from organize_rust_imports._main import main

if __name__ == "__main__":
    raise SystemExit(main())
