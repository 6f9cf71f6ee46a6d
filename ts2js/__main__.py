from ts2js.cli.main import main

if __name__ == "__main__":
    main()
