from mobile_asset_export.cli import main

raise SystemExit(main())
