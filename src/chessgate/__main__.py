from chessgate.app import main

raise SystemExit(main())
