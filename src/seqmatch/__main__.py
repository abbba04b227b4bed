from seqmatch.cli import main

raise SystemExit(main())
