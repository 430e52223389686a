from aura_shield.app import main

raise SystemExit(main())
