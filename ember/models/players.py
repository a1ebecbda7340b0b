from ..db import db


class Player(db.Model):
    __tablename__ = "Player"
    __table_args__ = (
        db.CheckConstraint("coins >= 0", name="ck_player_coins"),
        db.CheckConstraint("lootboxCount >= 0", name="ck_player_lootbox_count"),
        {"sqlite_autoincrement": True},
    )

    player_id = db.Column("playerId", db.Integer, primary_key=True)
    username = db.Column(db.Text, nullable=False, unique=True)
    password = db.Column(db.Text, nullable=False)       # werkzeug hash
    email = db.Column(db.Text, nullable=False, unique=True)
    coins = db.Column(db.Integer, nullable=False, server_default=db.text("0"))
    lootbox_count = db.Column("lootboxCount", db.Integer, nullable=False, server_default=db.text("0"))
    is_admin = db.Column("isAdmin", db.Integer, nullable=False, server_default=db.text("0"))
    joined_at = db.Column("joinedAt", db.Text, nullable=False)
