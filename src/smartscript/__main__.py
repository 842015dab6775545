from smartscript.cli import main

raise SystemExit(main())
