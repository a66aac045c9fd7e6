from code_review_helper.cli import main


if __name__ == "__main__":
    main(prog_name="codereview")
