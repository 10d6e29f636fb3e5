from .pipeline import main

exit(main())
