from citetrust_cli.inspect_cmd import main

if __name__ == "__main__":
    main()
