"""Testes do orquestrador de jogos: classificação, recuperação e laços."""

from __future__ import annotations

import unittest

from fakes import (
    GAME_PAYLOADS,
    SMART,
    FakeRelay,
    RecordingSleep,
    build_runtime,
    happy_relay,
    make_config,
)

from sonix.config.constants import MINES_CLAIM_DATA
from sonix.core.domain.game import PlayOutcome
from sonix.core.domain.relay import RelayResponse, TransportResponse
from sonix.core.exceptions import (
    GamePlayException,
    HttpStatusException,
    PermitNotSubmittedException,
    PermitRejectedException,
    RefundException,
    ReiterationException,
    UnknownGameException,
)
from sonix.core.services.game_orchestrator_service import build_game_definitions, classify_play_response

SUCCESS = {"result": {"hash": "0xabc"}}
LIMIT = {"error": {"message": "Daily limit reached"}}
RANDOM = {"error": {"message": "waiting for random number"}}
PERMIT_EXPIRED = {"error": {"message": "Permit expired"}}
NESTED = {
    "error": {"message": "execution reverted"},
    "result": {"hash": {"errorTypes": ["revert"], "actualError": {"details": "insufficient funds"}}},
}


def relay_response(body) -> RelayResponse:
    return RelayResponse.from_transport(TransportResponse(status=200, body=body))


class TestClassificacao(unittest.TestCase):
    """Ordem de prioridade da classificação."""

    def test_tabela(self) -> None:
        casos = [
            (SUCCESS, PlayOutcome.SUCCESS),
            (LIMIT, PlayOutcome.LIMITED),
            (RANDOM, PlayOutcome.RANDOMNESS_PENDING),
            (PERMIT_EXPIRED, PlayOutcome.PERMIT_REJECTED),
            (NESTED, PlayOutcome.SOFT_FAILURE),
            ({"error": {"message": "boom"}}, PlayOutcome.FAILED),
            ({"error": {}}, PlayOutcome.FAILED),
        ]
        for body, esperado in casos:
            with self.subTest(body=body):
                self.assertIs(classify_play_response(relay_response(body)), esperado)

    def test_limit_tem_prioridade_sobre_erro_aninhado(self) -> None:
        body = {"error": {"message": "limit"}, "result": {"hash": {"errorTypes": ["x"]}}}
        self.assertIs(classify_play_response(relay_response(body)), PlayOutcome.LIMITED)

    def test_sem_erro_ignora_hash_aninhado(self) -> None:
        body = {"result": {"hash": {"errorTypes": ["x"]}}}
        self.assertIs(classify_play_response(relay_response(body)), PlayOutcome.SUCCESS)


class TestDefinicoes(unittest.TestCase):

    def test_claim_somente_no_mines(self) -> None:
        config = make_config()
        definicoes = build_game_definitions(config.games, "0xarcade")
        self.assertIsNone(definicoes["plinko"].claim_call)
        self.assertEqual(definicoes["mines"].claim_call["dest"], "0xarcade")
        self.assertEqual(definicoes["mines"].claim_call["data"], MINES_CLAIM_DATA)
        self.assertEqual(definicoes["singlewheel"].call, GAME_PAYLOADS["singlewheel"])


class GameTestCase(unittest.IsolatedAsyncioTestCase):
    """Conta conectada, com sessão e permit submetido."""

    config_overrides: dict = {}

    async def asyncSetUp(self) -> None:
        self.relay = happy_relay()
        self.sleep = RecordingSleep()
        self.runtime = build_runtime(self.relay, make_config(**self.config_overrides), sleep=self.sleep)
        self.games = self.runtime.games
        await self.runtime.session.connect(self.runtime.conta)
        await self.runtime.session.create_session()
        await self.runtime.session.acquire_permit()

    def game_calls(self, name: str):
        data = GAME_PAYLOADS[name]["data"]
        return [r for r in self.relay.calls("call") if r.params["call"]["data"] == data]


class TestPlayGame(GameTestCase):

    async def test_plinko_sucesso_ponta_a_ponta(self) -> None:
        """Uma sessão, um permit assinado e submetido, uma jogada com sucesso."""
        self.relay.rpc("call", SUCCESS)

        outcome = await self.games.play_game("plinko")

        self.assertIs(outcome, PlayOutcome.SUCCESS)
        self.assertEqual(self.relay.rpc_methods, ["createSession", "permitTypedMessage", "permit", "call"])
        self.assertEqual(len(self.runtime.signer.typed_data_signed), 1)
        state = self.games.states["plinko"]
        self.assertFalse(state.limited)
        self.assertEqual(state.status.message, "Successfully played game: [plinko]")

        params = self.relay.calls("call")[0].params
        self.assertEqual(params["call"], GAME_PAYLOADS["plinko"])
        self.assertEqual(params["part"], "part-123")
        self.assertEqual(params["permit"], "0xpermit-signature")

    async def test_mines_limite_na_primeira_tentativa(self) -> None:
        """Limite atingido marca o jogo e não há segunda chamada nem claim."""
        self.relay.rpc("call", LIMIT)

        state = await self.games.play_until_limited("mines")

        self.assertTrue(state.limited)
        self.assertEqual(state.status.message, "Daily limit reached")
        self.assertEqual(len(self.relay.calls("call")), 1)

    async def test_limite_registra_espera_no_status(self) -> None:
        self.games.timing.game_wait = 4
        self.relay.rpc("call", LIMIT)

        await self.games.play_game("plinko")

        status = self.games.states["plinko"].status
        self.assertEqual(status.message, "Daily limit reached")
        self.assertIsNotNone(status.wait_until)
        self.assertEqual(self.sleep.calls.count(4), 2)

    async def test_permit_expirado_levanta_sem_repetir(self) -> None:
        self.relay.rpc("call", PERMIT_EXPIRED)

        with self.assertRaises(PermitRejectedException):
            await self.games.play_game("plinko")

        self.assertEqual(len(self.relay.calls("call")), 1)
        self.assertFalse(self.games.states["plinko"].limited)

    async def test_numero_aleatorio_reitera_uma_vez(self) -> None:
        self.relay.rpc("call", RANDOM)
        self.relay.rpc("reIterate", {"result": {}})
        self.games.timing.randomness_cooldown = 20

        outcome = await self.games.play_game("plinko")

        self.assertIs(outcome, PlayOutcome.RANDOMNESS_PENDING)
        self.assertEqual(self.relay.rpc_methods[-2:], ["call", "reIterate"])
        self.assertEqual(len(self.relay.calls("reIterate")), 1)
        self.assertEqual(self.relay.calls("reIterate")[0].params, {"game": "plinko", "player": SMART})
        self.assertIn(20, self.sleep.calls)
        self.assertFalse(self.games.states["plinko"].limited)

    async def test_falha_aninhada_e_suave(self) -> None:
        self.relay.rpc("call", NESTED)

        outcome = await self.games.play_game("singlewheel")

        self.assertIs(outcome, PlayOutcome.SOFT_FAILURE)
        self.assertIn("insufficient funds", self.games.states["singlewheel"].status.message)

    async def test_erro_desconhecido(self) -> None:
        self.relay.rpc("call", {"error": {"message": "boom"}})

        with self.assertRaises(GamePlayException) as ctx:
            await self.games.play_game("plinko")
        self.assertIn("boom", str(ctx.exception))

    async def test_jogo_desconhecido(self) -> None:
        with self.assertRaises(UnknownGameException):
            await self.games.play_game("roulette")
        self.assertEqual(self.relay.calls("call"), [])

    async def test_sem_permit_nenhuma_chamada(self) -> None:
        self.runtime.session.invalidate_permit()

        with self.assertRaises(PermitNotSubmittedException):
            await self.games.play_game("plinko")
        self.assertEqual(self.relay.calls("call"), [])

    async def test_reiterate_recusado(self) -> None:
        self.relay.rpc("call", RANDOM)
        self.relay.rpc("reIterate", HttpStatusException(500, "err"))

        with self.assertRaises(ReiterationException):
            await self.games.play_game("plinko")

    async def test_claim_do_mines_apos_jogada(self) -> None:
        self.relay.rpc("call", SUCCESS)

        await self.games.play_round("mines")

        calls = self.relay.calls("call")
        self.assertEqual(len(calls), 2)
        self.assertEqual(calls[1].params["call"]["data"], MINES_CLAIM_DATA)
        self.assertEqual(calls[1].params["call"]["dest"], "0x" + "ac" * 20)
        self.assertEqual(self.games.states["mines"].status.message, "Successfully played and claimed mines game.")

    async def test_mines_sem_contrato_avisa_e_nao_reivindica(self) -> None:
        self.games.definitions = build_game_definitions(self.games.config, "")
        self.relay.rpc("call", SUCCESS)

        await self.games.play_round("mines")

        self.assertEqual(len(self.relay.calls("call")), 1)
        self.assertTrue(any("arcade_contract" in m for m in self.runtime.log_handler.messages))

    async def test_claim_com_falha_nao_levanta(self) -> None:
        self.relay.rpc("call", SUCCESS, {"error": {"message": "nothing to claim"}})

        await self.games.play_round("mines")

        self.assertIn("nothing to claim", self.games.states["mines"].status.message)


class TestRefund(GameTestCase):
    config_overrides = {"randomness_recovery": "refund"}

    async def test_politica_refund(self) -> None:
        self.relay.rpc("call", RANDOM)
        self.relay.rpc("refund", {"result": {}})

        await self.games.play_game("plinko")

        self.assertEqual(len(self.relay.calls("refund")), 1)
        self.assertEqual(self.relay.calls("reIterate"), [])

    async def test_refund_recusado(self) -> None:
        self.relay.rpc("call", RANDOM)
        self.relay.rpc("refund", 500)

        with self.assertRaises(RefundException):
            await self.games.play_game("plinko")


class TestPlayUntilLimited(GameTestCase):

    async def test_repete_ate_o_limite_consultando_pontos(self) -> None:
        self.relay.rpc("call", SUCCESS, SUCCESS, LIMIT)

        state = await self.games.play_until_limited("plinko")

        self.assertTrue(state.limited)
        self.assertEqual(len(self.relay.calls("call")), 3)
        pontos = [r for r in self.relay.requests if r.url.startswith("https://gateway.test")]
        self.assertEqual(len(pontos), 3)
        self.assertEqual(self.runtime.points.points.total, 100)

    async def test_erro_aguarda_backoff_e_repete_o_mesmo_jogo(self) -> None:
        self.games.timing.game_retry_backoff = 30
        self.relay.rpc("call", {"error": {"message": "boom"}}, LIMIT)

        state = await self.games.play_until_limited("plinko")

        self.assertTrue(state.limited)
        self.assertEqual(len(self.game_calls("plinko")), 2)
        self.assertIn(30, self.sleep.calls)

    async def test_permit_rejeitado_e_obtido_novamente(self) -> None:
        self.relay.rpc("call", PERMIT_EXPIRED, LIMIT)

        await self.games.play_until_limited("plinko")

        self.assertEqual(
            self.relay.rpc_methods,
            ["createSession", "permitTypedMessage", "permit", "call",
             "permitTypedMessage", "permit", "call"],
        )

    async def test_limite_de_tentativas(self) -> None:
        self.games.config.max_game_attempts = 3
        self.relay.rpc("call", {"error": {"message": "boom"}})

        state = await self.games.play_until_limited("plinko")

        self.assertFalse(state.limited)
        self.assertEqual(len(self.relay.calls("call")), 3)

    async def test_jogo_desconhecido_nao_entra_em_laco(self) -> None:
        with self.assertRaises(UnknownGameException):
            await self.games.play_until_limited("roulette")

    async def test_play_all_na_ordem_configurada(self) -> None:
        self.relay.rpc("call", LIMIT)

        estados = await self.games.play_all()

        ordem = [r.params["call"]["data"] for r in self.relay.calls("call")]
        self.assertEqual(ordem, ["0xplinko", "0xmines", "0xwheel"])
        self.assertTrue(all(estado.limited for estado in estados.values()))


class TestRelayVazio(unittest.IsolatedAsyncioTestCase):

    async def test_estado_reiniciado_por_ciclo(self) -> None:
        runtime = build_runtime(FakeRelay())
        runtime.games.states["plinko"].mark_limited("limit")
        runtime.games.reset_games()
        self.assertFalse(runtime.games.states["plinko"].limited)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
