from ..db import db

LISTING_STATUSES = ("active", "cancelled", "sold")


class Listing(db.Model):
    __tablename__ = "Listing"
    __table_args__ = (
        db.CheckConstraint("price >= 1", name="ck_listing_price"),
        db.CheckConstraint("status IN ('active', 'cancelled', 'sold')", name="ck_listing_status"),
        {"sqlite_autoincrement": True},
    )

    listing_id = db.Column("listingId", db.Integer, primary_key=True)
    seller_id = db.Column("sellerId", db.Integer, db.ForeignKey("Player.playerId"), nullable=False)
    stove_id = db.Column("stoveId", db.Integer, db.ForeignKey("Stove.stoveId"), nullable=False)
    price = db.Column(db.Integer, nullable=False)
    listed_at = db.Column("listedAt", db.Text, nullable=False)
    status = db.Column(db.Text, nullable=False, server_default=db.text("'active'"))


class Trade(db.Model):
    __tablename__ = "Trade"
    __table_args__ = {"sqlite_autoincrement": True}

    trade_id = db.Column("tradeId", db.Integer, primary_key=True)
    listing_id = db.Column("listingId", db.Integer, db.ForeignKey("Listing.listingId"), nullable=False, unique=True)
    buyer_id = db.Column("buyerId", db.Integer, db.ForeignKey("Player.playerId"), nullable=False)
    executed_at = db.Column("executedAt", db.Text, nullable=False)


class PriceHistory(db.Model):
    __tablename__ = "PriceHistory"
    __table_args__ = {"sqlite_autoincrement": True}

    history_id = db.Column("historyId", db.Integer, primary_key=True)
    type_id = db.Column("typeId", db.Integer, db.ForeignKey("StoveType.typeId"), nullable=False)
    sale_price = db.Column("salePrice", db.Integer, nullable=False)
    sale_date = db.Column("saleDate", db.Text, nullable=False)


# one active listing per stove, enforced by the store
ACTIVE_LISTING_INDEX = db.Index(
    "uq_listing_active_stove",
    Listing.stove_id,
    unique=True,
    sqlite_where=db.text("status = 'active'"),
)
db.Index("idx_listing_seller", Listing.seller_id)
db.Index("idx_listing_stove", Listing.stove_id)
db.Index("idx_listing_status", Listing.status)
db.Index("idx_trade_buyer", Trade.buyer_id)
db.Index("idx_pricehistory_type", PriceHistory.type_id)
