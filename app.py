import os

from voteaholic import create_app

app = create_app()

if __name__ == "__main__":
    app.run(
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "3001")),
        debug=os.getenv("FLASK_DEBUG", "false").lower() == "true",
    )
