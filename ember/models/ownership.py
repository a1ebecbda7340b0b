from ..db import db

ACQUISITION_METHODS = ("lootbox", "trade", "mini-game")


class Ownership(db.Model):
    """Append-only custody history; the newest row per stove names its owner."""

    __tablename__ = "Ownership"
    __table_args__ = (
        db.CheckConstraint(
            "acquiredHow IN ('lootbox', 'trade', 'mini-game')", name="ck_ownership_how"
        ),
        {"sqlite_autoincrement": True},
    )

    ownership_id = db.Column("ownershipId", db.Integer, primary_key=True)
    stove_id = db.Column("stoveId", db.Integer, db.ForeignKey("Stove.stoveId"), nullable=False)
    player_id = db.Column("playerId", db.Integer, db.ForeignKey("Player.playerId"), nullable=False)
    acquired_at = db.Column("acquiredAt", db.Text, nullable=False)
    acquired_how = db.Column("acquiredHow", db.Text, nullable=False)


db.Index("idx_ownership_stove", Ownership.stove_id)
db.Index("idx_ownership_player", Ownership.player_id)
