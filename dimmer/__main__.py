from dimmer.cli.dim import main

raise SystemExit(main())
