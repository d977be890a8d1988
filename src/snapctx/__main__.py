from snapctx.cli import main

raise SystemExit(main())
