from asdf_anchor.cli import main

if __name__ == "__main__":
    main()
