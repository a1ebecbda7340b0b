from ..db import db

LOOTBOX_SOURCES = ("free", "purchase", "reward")


class LootboxType(db.Model):
    __tablename__ = "LootboxType"
    __table_args__ = {"sqlite_autoincrement": True}

    lootbox_type_id = db.Column("lootboxTypeId", db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text)
    cost_coins = db.Column("costCoins", db.Integer, nullable=False, server_default=db.text("0"))
    cost_free = db.Column("costFree", db.Integer, nullable=False, server_default=db.text("1"))
    daily_limit = db.Column("dailyLimit", db.Integer)
    is_available = db.Column("isAvailable", db.Integer, nullable=False, server_default=db.text("1"))


class Lootbox(db.Model):
    __tablename__ = "Lootbox"
    __table_args__ = (
        db.CheckConstraint(
            "acquiredHow IN ('free', 'purchase', 'reward')", name="ck_lootbox_how"
        ),
        {"sqlite_autoincrement": True},
    )

    lootbox_id = db.Column("lootboxId", db.Integer, primary_key=True)
    lootbox_type_id = db.Column(
        "lootboxTypeId", db.Integer, db.ForeignKey("LootboxType.lootboxTypeId"), nullable=False
    )
    player_id = db.Column("playerId", db.Integer, db.ForeignKey("Player.playerId"), nullable=False)
    opened_at = db.Column("openedAt", db.Text, nullable=False)
    acquired_how = db.Column("acquiredHow", db.Text, nullable=False)


class LootboxDrop(db.Model):
    __tablename__ = "LootboxDrop"
    __table_args__ = {"sqlite_autoincrement": True}

    drop_id = db.Column("dropId", db.Integer, primary_key=True)
    lootbox_id = db.Column(
        "lootboxId", db.Integer, db.ForeignKey("Lootbox.lootboxId"), nullable=False, unique=True
    )
    stove_id = db.Column("stoveId", db.Integer, db.ForeignKey("Stove.stoveId"), nullable=False, unique=True)


db.Index("idx_lootbox_player", Lootbox.player_id)
db.Index("idx_lootbox_type", Lootbox.lootbox_type_id)
