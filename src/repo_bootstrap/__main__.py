from repo_bootstrap.bootstrap.main import main

raise SystemExit(main())
