from __future__ import annotations

from decimal import Decimal
import logging

import pytest

from app.application.dto.registration_checkout import CheckoutBackUrls, CreateRegistrationCheckoutInput
from app.application.use_cases.create_registration_checkout import CreateRegistrationCheckoutUseCase
from app.domain.entities.registration import CheckoutSession, Registration, RegistrationDraft
from app.domain.exceptions import PaymentGatewayError, StorageError


class FakeRegistrationPort:
    def __init__(
        self,
        *,
        registration_id: str | None = "42",
        create_error: Exception | None = None,
        attach_error: Exception | None = None,
    ):
        self._registration_id = registration_id
        self._create_error = create_error
        self._attach_error = attach_error
        self.created: list[RegistrationDraft] = []
        self.attached: list[tuple[str, str]] = []

    def create_registration(self, *, draft: RegistrationDraft) -> Registration:
        self.created.append(draft)
        if self._create_error is not None:
            raise self._create_error
        return Registration(
            id=self._registration_id,
            name=draft.name,
            contact_number=draft.contact_number,
            email=draft.email,
            course=draft.course,
            module=draft.module,
            price=draft.price,
        )

    def attach_checkout_session(self, *, registration_id: str, checkout_session_id: str) -> None:
        self.attached.append((registration_id, checkout_session_id))
        if self._attach_error is not None:
            raise self._attach_error


class FakePaymentPort:
    def __init__(self, *, session: CheckoutSession | None = None, error: Exception | None = None):
        self._session = session or CheckoutSession(id="pref-1", init_point="https://mp.test/checkout/pref-1")
        self._error = error
        self.calls: list[dict] = []

    def create_checkout_session(self, **kwargs) -> CheckoutSession:
        self.calls.append(kwargs)
        if self._error is not None:
            raise self._error
        return self._session


BACK_URLS = CheckoutBackUrls.for_site("https://curso.test/")


def _draft() -> RegistrationDraft:
    return RegistrationDraft(
        name="Ana",
        contact_number="+5511999999999",
        email="ana@x.com",
        course="Python",
        module="Intermediário",
        price=Decimal("70"),
    )


def _use_case(registration_port, payment_port) -> CreateRegistrationCheckoutUseCase:
    return CreateRegistrationCheckoutUseCase(
        registration_port=registration_port,
        payment_port=payment_port,
        back_urls=BACK_URLS,
    )


def test_execute_creates_registration_checkout_and_link():
    registrations = FakeRegistrationPort()
    payments = FakePaymentPort()

    output = _use_case(registrations, payments).execute(CreateRegistrationCheckoutInput(draft=_draft()))

    assert output.checkout_url == "https://mp.test/checkout/pref-1"
    assert output.registration_id == "42"
    assert output.checkout_session_id == "pref-1"
    assert output.linked is True
    assert output.registration.checkout_session_id == "pref-1"
    assert registrations.created[0].price == Decimal("70")
    assert payments.calls == [
        {
            "title": "Python – Intermediário",
            "unit_price": Decimal("70"),
            "payer_name": "Ana",
            "payer_email": "ana@x.com",
            "back_urls": BACK_URLS,
        }
    ]
    assert registrations.attached == [("42", "pref-1")]


def test_back_urls_point_pending_and_failure_at_error_page():
    assert BACK_URLS.success == "https://curso.test/sucesso.html"
    assert BACK_URLS.failure == "https://curso.test/erro.html"
    assert BACK_URLS.pending == "https://curso.test/erro.html"


def test_storage_failure_stops_before_payment():
    registrations = FakeRegistrationPort(create_error=StorageError("Erro ao salvar inscrição no banco."))
    payments = FakePaymentPort()

    with pytest.raises(StorageError):
        _use_case(registrations, payments).execute(CreateRegistrationCheckoutInput(draft=_draft()))

    assert payments.calls == []
    assert registrations.attached == []


def test_payment_failure_keeps_created_registration():
    registrations = FakeRegistrationPort()
    payments = FakePaymentPort(error=PaymentGatewayError("Erro ao criar checkout no Mercado Pago."))

    with pytest.raises(PaymentGatewayError):
        _use_case(registrations, payments).execute(CreateRegistrationCheckoutInput(draft=_draft()))

    assert len(registrations.created) == 1
    assert registrations.created[0].price == Decimal("70")
    assert registrations.attached == []


def test_link_failure_is_logged_and_checkout_still_returned(caplog: pytest.LogCaptureFixture):
    registrations = FakeRegistrationPort(attach_error=RuntimeError("connection reset"))
    payments = FakePaymentPort()

    with caplog.at_level(logging.WARNING):
        output = _use_case(registrations, payments).execute(CreateRegistrationCheckoutInput(draft=_draft()))

    assert output.checkout_url == "https://mp.test/checkout/pref-1"
    assert output.linked is False
    assert output.registration.checkout_session_id is None
    assert "link_failed" in caplog.text


@pytest.mark.parametrize(
    ("registration_id", "session_id"),
    [(None, "pref-1"), ("42", None)],
)
def test_link_is_skipped_without_both_ids(registration_id: str | None, session_id: str | None):
    registrations = FakeRegistrationPort(registration_id=registration_id)
    payments = FakePaymentPort(session=CheckoutSession(id=session_id, init_point="https://mp.test/x"))

    output = _use_case(registrations, payments).execute(CreateRegistrationCheckoutInput(draft=_draft()))

    assert output.linked is False
    assert output.checkout_url == "https://mp.test/x"
    assert registrations.attached == []


def test_injected_logger_receives_progress_messages():
    records: list[str] = []

    class _ListHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            records.append(record.getMessage())

    injected = logging.getLogger("tests.registration_checkout.injected")
    injected.setLevel(logging.INFO)
    injected.addHandler(_ListHandler())
    use_case = CreateRegistrationCheckoutUseCase(
        registration_port=FakeRegistrationPort(),
        payment_port=FakePaymentPort(),
        back_urls=BACK_URLS,
        logger=injected,
    )

    use_case.execute(CreateRegistrationCheckoutInput(draft=_draft()))

    assert any("registration_created" in message for message in records)
    assert any("checkout_created" in message for message in records)
