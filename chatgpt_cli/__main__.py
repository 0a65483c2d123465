from chatgpt_cli.main import main

main()
