from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

# Rank meaning "no explicit position, sort last"
UNORDERED_RANK = 999
# Out-of-band rank a service is parked at while the ledger is rebalanced
PARKED_RANK = 9999


class AppointmentStatus:
    SCHEDULED = "SCHEDULED"
    DONE = "DONE"
    CANCELLED = "CANCELLED"

    ALL = (SCHEDULED, DONE, CANCELLED)


class PaymentMethod:
    CASH = "CASH"
    TRANSFER = "TRANSFER"
    CARD = "CARD"
    MP = "MP"  # mobile payment

    ALL = (CASH, TRANSFER, CARD, MP)


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    color = Column(String(20), nullable=True)  # Calendar colour tag, e.g. #RRGGBB
    active = Column(Boolean, default=True, nullable=False)

    appointments = relationship("Appointment", back_populates="employee")


class Service(Base):
    __tablename__ = "services"
    __table_args__ = (
        # Names only need to be unique among services still offered
        Index(
            "uq_services_active_name",
            "name",
            unique=True,
            postgresql_where=text("active"),
            sqlite_where=text("active = 1"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    base_price = Column(Numeric(10, 2), default=0, nullable=False)
    base_duration_minutes = Column(Integer, default=60, nullable=False)
    category = Column(String(80), nullable=True)
    orden_prioridad = Column(Integer, default=UNORDERED_RANK, nullable=False, index=True)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    appointments = relationship("Appointment", back_populates="service")


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(200), unique=True, nullable=False, index=True)
    phone = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    appointments = relationship("Appointment", back_populates="client")


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True, index=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False, index=True)
    final_price = Column(Numeric(10, 2), nullable=False, default=0)
    final_duration_minutes = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    starts_at = Column(DateTime(timezone=True), nullable=False, index=True)
    ends_at = Column(DateTime(timezone=True), nullable=False)
    # SCHEDULED → DONE happens when payments cover final_price; CANCELLED is set by hand
    status = Column(String(20), default=AppointmentStatus.SCHEDULED, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    employee = relationship("Employee", back_populates="appointments")
    service = relationship("Service", back_populates="appointments")
    client = relationship("Client", back_populates="appointments")
    payments = relationship(
        "Payment",
        back_populates="appointment",
        cascade="all, delete-orphan",
        order_by="Payment.id",
    )

    @property
    def employee_name(self):
        return self.employee.name if self.employee else None

    @property
    def employee_color(self):
        return self.employee.color if self.employee else None

    @property
    def service_name(self):
        return self.service.name if self.service else None

    @property
    def client_name(self):
        return self.client.full_name if self.client else None

    @property
    def client_phone(self):
        return self.client.phone if self.client else None


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    appointment_id = Column(
        Integer, ForeignKey("appointments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    method = Column(String(20), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    appointment = relationship("Appointment", back_populates="payments")


class DailyNote(Base):
    """Free-text operator notes, one per calendar day"""

    __tablename__ = "daily_notes"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, unique=True, nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
