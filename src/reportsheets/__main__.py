from reportsheets.cli import main

raise SystemExit(main())
