import logging

from flask import Flask
from tinydb import TinyDB

from zkscore.config import SchemeConfig

from score_routes import score_bp, init_score_bp


def create_app(config=None, db=None):
    """Flask 앱을 생성한다.

    Args:
        config: SchemeConfig (None 이면 기본값)
        db: TinyDB 인스턴스 (None 이면 config.db_path 파일 DB)
    """
    config = config if config is not None else SchemeConfig()
    if db is None:
        # db = TinyDB(storage=MemoryStorage) #Memory DB
        db = TinyDB(config.db_path)          #Storage DB

    app = Flask(__name__)
    app.secret_key = "key"
    app.config["ZKSCORE"] = config

    init_score_bp(db.table("score"))
    app.register_blueprint(score_bp)
    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    create_app().run(debug=True)
