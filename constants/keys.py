class StorageKeys:
    """Keys of the persistent, origin-scoped key-value store."""

    PLAN_SELECTION = "medical_plan_selection"
    CUSTOMER_INFO = "medical_customer_info"
    IMPORTANT_ACK = "medical_important_ack"
    NOTICE_ANSWERS = "medical_notice_answers"
    BENEFICIARY = "medical_beneficiary_info"
    PAYMENT_METHOD = "medical_payment_method"
    KYC_STATE = "medical_kyc_state"
    APPLICATION_NUMBER = "medical_application_number"


class StepAddress:
    """Opaque addresses of the wizard screens."""

    PLAN = "/medical"
    CUSTOMER_INFO = "/medical/customer-info"
    IMPORTANT = "/medical/important"
    PRE_NOTICE_CHECK = "/medical/pre-notice-check"
    NOTICE = "/medical/notice"
    BENEFICIARY = "/medical/beneficiary"
    PAYMENT = "/medical/payment"
    IDENTITY = "/medical/identity"
    CONFIRM = "/medical/confirm"
    COMPLETE = "/medical/complete"


class StateKeys:
    """Keys for data stored in ``st.session_state``."""

    SESSION_ID = "session_id"
    CLIENT_ID = "client_id"
    CURRENT_ADDRESS = "current_address"
    SNAPSHOTS = "snapshots"
    ERRORS = "step.errors"
    TOUCHED = "step.touched"
    SHOW_ALL_ERRORS = "step.show_all_errors"
    ADVISOR = "plan.advisor"
    SUBMITTED = "confirm.submitted"

