"""Testes da máquina de estados sessão → permit → part."""

from __future__ import annotations

import unittest

from fakes import (
    OWNER,
    PRIVATE_KEY,
    RELAY_URL,
    TYPED_DATA,
    FakeRelay,
    FakeSigner,
    RecordingSleep,
    make_logger,
    typed_message,
)

from sonix.config.constants import SESSION_TTL_MS
from sonix.core.domain.account import Conta
from sonix.core.domain.session import SessionStage
from sonix.core.exceptions import (
    HttpStatusException,
    InvalidCredentialException,
    PermitNotSubmittedException,
    PermitRequestException,
    PermitSubmissionException,
    RequestException,
    SessionCreationException,
    SessionStageException,
)
from sonix.core.services.rpc_client import RelayRpcClient
from sonix.core.services.session_manager_service import SessionManagerService, parse_typed_message

NOW_MS = 1_700_000_000_000


class SessionTestCase(unittest.IsolatedAsyncioTestCase):
    """Base com relay falso e sessão ainda desconectada."""

    def setUp(self) -> None:
        self.relay = FakeRelay()
        self.relay.rpc("createSession", {"result": {}})
        self.relay.rpc("permitTypedMessage", {"result": {"typedMessage": typed_message()}})
        self.relay.rpc("permit", {"result": {"hashKey": "server-hash-key"}})
        self.signer = FakeSigner()
        self.logger, self.log = make_logger()
        self.session = SessionManagerService(
            self.signer,
            RelayRpcClient(self.relay, RELAY_URL),
            token_approval_contract="0x" + "44" * 20,
            clock_ms=lambda: NOW_MS,
            logger=self.logger,
            sleep=RecordingSleep(),
        )

    async def connect(self) -> None:
        await self.session.connect(Conta(segredo=PRIVATE_KEY))


class TestFluxoCompleto(SessionTestCase):

    async def test_part_igual_ao_hash_key_do_servidor(self) -> None:
        """createSession → permitTypedMessage → sign → permit guarda o hashKey exato."""
        await self.connect()
        await self.session.create_session()
        await self.session.acquire_permit()

        self.assertIs(self.session.stage, SessionStage.PERMIT_SUBMITTED)
        self.assertEqual(self.session.part, "server-hash-key")
        self.assertEqual(self.session.capability, ("server-hash-key", "0xpermit-signature"))
        self.assertEqual(self.relay.rpc_methods, ["createSession", "permitTypedMessage", "permit"])
        self.assertEqual(
            self.relay.calls("permit")[0].params,
            {"owner": OWNER, "signature": "0xpermit-signature"},
        )
        self.assertEqual(self.signer.typed_data_signed,
                         [(TYPED_DATA["domain"], TYPED_DATA["types"], TYPED_DATA["message"])])

    async def test_sessao_expira_em_24h(self) -> None:
        await self.connect()
        until = await self.session.create_session()

        self.assertEqual(until, NOW_MS + SESSION_TTL_MS)
        params = self.relay.calls("createSession")[0].params
        self.assertEqual(params, {"owner": OWNER, "until": NOW_MS + 86_400_000})

    async def test_connect_define_x_owner(self) -> None:
        await self.connect()
        await self.session.create_session()
        self.assertEqual(self.relay.requests[0].headers["x-owner"], OWNER)
        self.assertIs(self.session.stage, SessionStage.SESSION_CREATED)


class TestErrosDeEtapa(SessionTestCase):

    async def test_segredo_invalido(self) -> None:
        with self.assertRaises(InvalidCredentialException):
            await self.session.connect(Conta(segredo="not a key"))
        self.assertIs(self.session.stage, SessionStage.DISCONNECTED)

    async def test_create_session_status_diferente_de_200(self) -> None:
        """Status != 200 levanta SessionCreationException sem avançar a etapa."""
        self.relay._rpc["createSession"] = [500]
        await self.connect()

        with self.assertRaises(SessionCreationException):
            await self.session.create_session()
        self.assertIs(self.session.stage, SessionStage.CONNECTED)

    async def test_create_session_erro_http(self) -> None:
        self.relay._rpc["createSession"] = [HttpStatusException(502, "Bad Gateway")]
        await self.connect()

        with self.assertRaises(SessionCreationException) as ctx:
            await self.session.create_session()
        self.assertIsInstance(ctx.exception.cause, HttpStatusException)
        self.assertIs(self.session.stage, SessionStage.CONNECTED)

    async def test_create_session_antes_de_conectar(self) -> None:
        with self.assertRaises(SessionStageException):
            await self.session.create_session()
        self.assertEqual(self.relay.requests, [])

    async def test_permit_typed_message_com_erro_rpc(self) -> None:
        self.relay._rpc["permitTypedMessage"] = [{"error": {"message": "session not found"}}]
        await self.connect()
        await self.session.create_session()

        with self.assertRaises(PermitRequestException):
            await self.session.request_permit_message()
        self.assertIs(self.session.stage, SessionStage.SESSION_CREATED)

    async def test_permit_typed_message_malformado(self) -> None:
        self.relay._rpc["permitTypedMessage"] = [{"result": {"typedMessage": "{not json"}}]
        await self.connect()
        await self.session.create_session()

        with self.assertRaises(PermitRequestException):
            await self.session.request_permit_message()

    async def test_permit_typed_message_falha_de_transporte(self) -> None:
        self.relay._rpc["permitTypedMessage"] = [RequestException("proxy down")]
        await self.connect()
        await self.session.create_session()

        with self.assertRaises(PermitRequestException):
            await self.session.request_permit_message()

    async def test_assinar_antes_de_solicitar(self) -> None:
        await self.connect()
        await self.session.create_session()
        with self.assertRaises(SessionStageException):
            self.session.sign_permit()

    async def test_submit_com_erro_do_relay(self) -> None:
        self.relay._rpc["permit"] = [{"error": {"message": "bad signature"}}]
        await self.connect()
        await self.session.create_session()

        with self.assertRaises(PermitSubmissionException) as ctx:
            await self.session.acquire_permit()
        self.assertIn("bad signature", str(ctx.exception))
        self.assertIsNone(self.session.part)

    async def test_submit_propaga_erro_de_transporte(self) -> None:
        self.relay._rpc["permit"] = [HttpStatusException(500, "Internal Server Error")]
        await self.connect()
        await self.session.create_session()

        with self.assertRaises(HttpStatusException):
            await self.session.acquire_permit()

    async def test_capability_antes_do_submit(self) -> None:
        await self.connect()
        await self.session.create_session()
        await self.session.request_permit_message()
        self.session.sign_permit()

        with self.assertRaises(PermitNotSubmittedException):
            _ = self.session.capability


class TestInvalidacao(SessionTestCase):

    async def test_invalidar_volta_para_sessao_criada(self) -> None:
        await self.connect()
        await self.session.create_session()
        await self.session.acquire_permit()

        self.session.invalidate_permit()

        self.assertIs(self.session.stage, SessionStage.SESSION_CREATED)
        self.assertIsNone(self.session.part)
        self.assertIsNone(self.session.permit_signature)
        with self.assertRaises(PermitNotSubmittedException):
            _ = self.session.capability

        await self.session.acquire_permit()
        self.assertEqual(self.relay.rpc_methods.count("permitTypedMessage"), 2)

    async def test_nova_sessao_descarta_permit_anterior(self) -> None:
        await self.connect()
        await self.session.create_session()
        await self.session.acquire_permit()

        await self.session.create_session()

        self.assertIs(self.session.stage, SessionStage.SESSION_CREATED)
        self.assertIsNone(self.session.part)


class TestParseTypedMessage(unittest.TestCase):

    def test_formato_com_e_sem_json(self) -> None:
        self.assertEqual(parse_typed_message(typed_message(True)).domain, TYPED_DATA["domain"])
        self.assertEqual(parse_typed_message(typed_message(False)).message, TYPED_DATA["message"])
        self.assertEqual(parse_typed_message({"json": TYPED_DATA}).types, TYPED_DATA["types"])

    def test_campos_ausentes(self) -> None:
        with self.assertRaises(ValueError):
            parse_typed_message('{"json": {"domain": {}}}')


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
