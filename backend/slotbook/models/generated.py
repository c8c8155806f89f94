from sqlalchemy import Column, Float, ForeignKey, Index, Integer, PrimaryKeyConstraint, Text, UniqueConstraint, text

from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


class Vendors(Base):
    __tablename__ = 'vendors'

    business_name = Column(Text, nullable=False)
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    buffer_minutes = Column(Integer, nullable=False, server_default=text('0'))
    min_lead_time_hours = Column(Integer, nullable=False, server_default=text('0'))
    id = Column(Integer, primary_key=True)
    email = Column(Text)
    phone = Column(Text)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    services = relationship('Services', back_populates='vendor')
    availability = relationship('Availability', back_populates='vendor')
    exceptions = relationship('VendorExceptions', back_populates='vendor')
    bookings = relationship('Bookings', back_populates='vendor')


class Services(Base):
    __tablename__ = 'services'

    vendor_id = Column(ForeignKey('vendors.id', ondelete='CASCADE'), nullable=False)
    name = Column(Text, nullable=False)
    duration_min = Column(Integer, nullable=False)
    price = Column(Float, nullable=False, server_default=text('0'))
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    id = Column(Integer, primary_key=True)
    description = Column(Text)
    deleted_at = Column(Text)

    vendor = relationship('Vendors', back_populates='services')
    bookings = relationship('Bookings', back_populates='service')


class Availability(Base):
    __tablename__ = 'availability'
    __table_args__ = (
        UniqueConstraint('vendor_id', 'day_of_week'),
    )

    vendor_id = Column(ForeignKey('vendors.id', ondelete='CASCADE'), nullable=False)
    day_of_week = Column(Integer, nullable=False)  # 0 = Sunday
    start_time = Column(Text, nullable=False)
    end_time = Column(Text, nullable=False)
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    id = Column(Integer, primary_key=True)

    vendor = relationship('Vendors', back_populates='availability')


class VendorExceptions(Base):
    __tablename__ = 'vendor_exceptions'
    __table_args__ = (
        UniqueConstraint('vendor_id', 'date'),
    )

    vendor_id = Column(ForeignKey('vendors.id', ondelete='CASCADE'), nullable=False)
    date = Column(Text, nullable=False)  # YYYY-MM-DD
    is_closed = Column(Integer, nullable=False, server_default=text('1'))
    id = Column(Integer, primary_key=True)
    start_time = Column(Text)
    end_time = Column(Text)
    reason = Column(Text)

    vendor = relationship('Vendors', back_populates='exceptions')


class Bookings(Base):
    __tablename__ = 'bookings'
    __table_args__ = (
        Index(
            'uq_bookings_active_start',
            'vendor_id', 'date', 'start_time',
            unique=True,
            sqlite_where=text("status IN ('pending', 'confirmed')"),
            postgresql_where=text("status IN ('pending', 'confirmed')"),
        ),
        Index('ix_bookings_vendor_date', 'vendor_id', 'date'),
    )

    vendor_id = Column(ForeignKey('vendors.id', ondelete='CASCADE'), nullable=False)
    service_id = Column(ForeignKey('services.id'), nullable=False)
    customer_id = Column(Integer, nullable=False)
    date = Column(Text, nullable=False)  # YYYY-MM-DD
    start_time = Column(Text, nullable=False)
    end_time = Column(Text, nullable=False)
    status = Column(Text, nullable=False, server_default=text("'confirmed'"))
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
    updated_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
    id = Column(Integer, primary_key=True)
    customer_notes = Column(Text)
    vendor_notes = Column(Text)
    cancel_reason = Column(Text)

    vendor = relationship('Vendors', back_populates='bookings')
    service = relationship('Services', back_populates='bookings')


class BookingDayLocks(Base):
    """One row per (vendor, date); admission locks it before checking conflicts."""
    __tablename__ = 'booking_day_locks'
    __table_args__ = (
        PrimaryKeyConstraint('vendor_id', 'date'),
    )

    vendor_id = Column(ForeignKey('vendors.id', ondelete='CASCADE'), nullable=False)
    date = Column(Text, nullable=False)
