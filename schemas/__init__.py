from schemas.document import DocumentCreate, DocumentEntry, DocumentRenew, DocumentShare, DocumentUpdate
from schemas.loan import ForeclosureCreate, LoanCreate, LoanUpdate, NocSubmit
from schemas.master import MasterCreate, MasterUpdate
from schemas.payment import ApprovalProcess, MakePaymentProcess, PaymentRequestCreate, TallyEntryProcess
from schemas.subscription import ApprovalSubmit, PaymentSubmit, RenewalSubmit, SubscriptionCreate
from schemas.user import CurrentUser, LoginRequest, UserCreate, UserUpdate

__all__ = [
    "ApprovalProcess",
    "ApprovalSubmit",
    "CurrentUser",
    "DocumentCreate",
    "DocumentEntry",
    "DocumentRenew",
    "DocumentShare",
    "DocumentUpdate",
    "ForeclosureCreate",
    "LoanCreate",
    "LoanUpdate",
    "LoginRequest",
    "MakePaymentProcess",
    "MasterCreate",
    "MasterUpdate",
    "NocSubmit",
    "PaymentRequestCreate",
    "PaymentSubmit",
    "RenewalSubmit",
    "SubscriptionCreate",
    "TallyEntryProcess",
    "UserCreate",
    "UserUpdate",
]
