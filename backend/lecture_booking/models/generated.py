from sqlalchemy import Column, Float, ForeignKey, Index, Integer, Text, text

from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


class Courses(Base):
    __tablename__ = 'courses'

    title = Column(Text, nullable=False)
    id = Column(Integer, primary_key=True)
    duration = Column(Text)
    category = Column(Text)
    description = Column(Text)
    target_audience = Column(Text)
    image_url = Column(Text)
    tags = Column(Text, nullable=False, server_default=text("'[]'"))
    requirements = Column(Text)
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    reservations = relationship('Reservations', back_populates='course')


class Reservations(Base):
    __tablename__ = 'reservations'
    __table_args__ = (
        # At most one active reservation per date+slot, enforced by the store
        Index(
            'ux_reservations_active_slot',
            'date', 'slot',
            unique=True,
            sqlite_where=text("status != 'cancelled'"),
            postgresql_where=text("status != 'cancelled'"),
        ),
        Index('ix_reservations_date', 'date'),
    )

    date = Column(Text, nullable=False)  # YYYY-MM-DD
    slot = Column(Text, nullable=False)
    status = Column(Text, nullable=False, server_default=text("'pending'"))
    rate_per_hour = Column(Float, nullable=False, server_default=text('0'))
    payment_received = Column(Integer, nullable=False, server_default=text('0'))
    receipt_sent = Column(Integer, nullable=False, server_default=text('0'))
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
    updated_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
    id = Column(Integer, primary_key=True)
    course_id = Column(ForeignKey('courses.id', ondelete='SET NULL'))
    course_name = Column(Text)
    org_name = Column(Text)
    contact_name = Column(Text)
    contact_phone = Column(Text)
    contact_email = Column(Text)
    contact_social = Column(Text)
    city = Column(Text)
    notes = Column(Text)
    work_category = Column(Text)
    fee_type = Column(Text)
    source = Column(Text)

    course = relationship('Courses', back_populates='reservations')
