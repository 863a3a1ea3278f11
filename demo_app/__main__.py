from demo_app.app import main

main()
