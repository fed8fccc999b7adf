from turnero.models.tenant import Tenant
from turnero.models.service import Service
from turnero.models.professional import Professional
from turnero.models.customer import Customer
from turnero.models.appointment import Appointment
from turnero.models.blocked_date import BlockedDate
from turnero.models.admin_user import AdminUser
