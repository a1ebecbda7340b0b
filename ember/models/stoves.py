from ..db import db

# Authoritative rarity catalogue for this deployment. Some older fixtures used
# "mythic" in place of "epic"; the two sets are not merged.
RARITIES = ("common", "rare", "epic", "legendary", "limited")


class StoveType(db.Model):
    __tablename__ = "StoveType"
    __table_args__ = (
        db.CheckConstraint(
            "rarity IN (%s)" % ", ".join(f"'{r}'" for r in RARITIES), name="ck_stovetype_rarity"
        ),
        db.CheckConstraint("lootboxWeight > 0", name="ck_stovetype_weight"),
        {"sqlite_autoincrement": True},
    )

    type_id = db.Column("typeId", db.Integer, primary_key=True)
    name = db.Column(db.Text, nullable=False, unique=True)
    image_url = db.Column("imageUrl", db.Text, nullable=False)
    rarity = db.Column(db.Text, nullable=False)
    lootbox_weight = db.Column("lootboxWeight", db.Integer, nullable=False)


class Stove(db.Model):
    __tablename__ = "Stove"
    __table_args__ = {"sqlite_autoincrement": True}

    stove_id = db.Column("stoveId", db.Integer, primary_key=True)
    type_id = db.Column("typeId", db.Integer, db.ForeignKey("StoveType.typeId"), nullable=False)
    # denormalised pointer to the latest Ownership row's player
    current_owner_id = db.Column("currentOwnerId", db.Integer, db.ForeignKey("Player.playerId"), nullable=False)
    minted_at = db.Column("mintedAt", db.Text, nullable=False)


db.Index("idx_stove_owner", Stove.current_owner_id)
db.Index("idx_stove_type", Stove.type_id)
