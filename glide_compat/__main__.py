from glide_compat.cli import main

main()
