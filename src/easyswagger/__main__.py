from easyswagger.app import main

main()
