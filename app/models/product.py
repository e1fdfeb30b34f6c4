from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey, DateTime, JSON
from sqlalchemy.orm import relationship
from app.db.session import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text)
    description = Column(Text)
    category = Column(Text)
    price = Column(Numeric(10, 2))
    discount_percentage = Column("discountpercentage", Numeric)
    rating = Column(Numeric)
    stock = Column(Integer)
    tags = Column(JSON, default=list)
    brand = Column(Text)
    sku = Column(Text)
    weight = Column(Numeric)
    dimensions = Column(JSON, nullable=True)
    availability_status = Column("availabilitystatus", Text)
    minimum_order_quantity = Column("minimumorderquantity", Integer)
    meta = Column(JSON, nullable=True)
    images = Column(JSON, default=list)  # Store image URLs as JSON
    thumbnail = Column(Text)

    reviews = relationship("Review", back_populates="product", cascade="all, delete")
    cart_items = relationship("CartItem", back_populates="product")
    orders = relationship("Order", back_populates="product")

    def __str__(self):
        return self.title or f"Product {self.id}"


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    imgurl = Column(String(255), nullable=True)


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    rating = Column(Integer)
    comment = Column(Text)
    date = Column(DateTime)
    reviewer_name = Column("reviewername", Text)
    reviewer_email = Column("revieweremail", Text)

    product = relationship("Product", back_populates="reviews")


class ImageCarousel(Base):
    __tablename__ = "image_carousel"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=True)
    image_url = Column(Text, nullable=False)
