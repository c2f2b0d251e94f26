from pipe_stream.main import main

raise SystemExit(main())
