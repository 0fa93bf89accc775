from animeapi.web import run

if __name__ == "__main__":
    run()
