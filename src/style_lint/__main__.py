from style_lint.cli import main

raise SystemExit(main())
