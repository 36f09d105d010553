from calc_tool.repl import main

raise SystemExit(main())
