from enum_string_gen.cli.main import main

raise SystemExit(main())
