from flask import Flask, jsonify

from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from zkp.schnorr.config import DEFAULT_GROUP, PROTOCOL_NAME
from zkp.schnorr.log import configure_logging

from schnorr_routes import schnorr_bp, init_schnorr_bp

DB = TinyDB(storage=MemoryStorage) #Memory DB

app = Flask(__name__)
app.secret_key = "key"
app.config["SCHNORR_GROUP"] = DEFAULT_GROUP

schnorr_db = DB.table("schnorr")

init_schnorr_bp(schnorr_db)
app.register_blueprint(schnorr_bp)


def clear_schnorr_db():
    schnorr_db.truncate()


@app.route("/")
def main():
    return jsonify({
        "protocol": PROTOCOL_NAME,
        "group": app.config["SCHNORR_GROUP"],
    })


if __name__ == "__main__":
    configure_logging()
    app.run(debug=True)
