from testcase_sync.cli import main

raise SystemExit(main())
