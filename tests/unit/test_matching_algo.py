import pytest

from src.om_common.errors import InvalidOfferError
from src.om_matching.domain.models import Offer
from src.om_matching.engine.matching_algo import (
    find_match,
    is_compatible,
    split_by_direction,
    validate_offer,
)
from src.om_matching.engine.offer_book import OfferBook


def _offer(submitter: str, direction: str, token: str = "ETH",
           amount: int = 100, price: int = 5000) -> Offer:
    return Offer(submitter_id=submitter, token=token, price=price, amount=amount,
                 direction=direction, settlement_wallet=f"0x{submitter}")


class TestValidateOffer:
    @pytest.mark.parametrize("direction", ["BUY", "SELL"])
    def test_accepts_buy_and_sell(self, direction: str) -> None:
        validate_offer(_offer("alice", direction))

    @pytest.mark.parametrize("direction", ["", "buy", "HOLD"])
    def test_rejects_other_directions(self, direction: str) -> None:
        with pytest.raises(InvalidOfferError) as exc:
            validate_offer(_offer("alice", direction))
        assert exc.value.code == 1001


class TestIsCompatible:
    def test_equal_terms_from_different_submitters(self) -> None:
        assert is_compatible(_offer("alice", "BUY"), _offer("bob", "SELL"))

    def test_same_submitter_never_matches(self) -> None:
        assert not is_compatible(_offer("alice", "BUY"), _offer("alice", "SELL"))

    @pytest.mark.parametrize(
        "kwargs", [{"token": "BTC"}, {"amount": 101}, {"price": 4999}]
    )
    def test_any_differing_term_blocks_match(self, kwargs: dict[str, object]) -> None:
        resting = _offer("bob", "SELL", **kwargs)  # type: ignore[arg-type]
        assert not is_compatible(_offer("alice", "BUY"), resting)


class TestFindMatch:
    def test_buy_searches_sell_side(self) -> None:
        ob = OfferBook()
        seller = _offer("bob", "SELL")
        ob.add(seller)
        assert find_match(_offer("alice", "BUY"), ob) is seller

    def test_sell_searches_buy_side(self) -> None:
        ob = OfferBook()
        buyer = _offer("alice", "BUY")
        ob.add(buyer)
        assert find_match(_offer("bob", "SELL"), ob) is buyer

    def test_same_side_is_never_searched(self) -> None:
        ob = OfferBook()
        ob.add(_offer("bob", "BUY"))
        assert find_match(_offer("alice", "BUY"), ob) is None

    def test_first_compatible_in_book_order_wins(self) -> None:
        ob = OfferBook()
        ob.add(_offer("carol", "SELL", price=4000))
        first = _offer("bob", "SELL")
        ob.add(first)
        ob.add(_offer("dave", "SELL"))
        assert find_match(_offer("alice", "BUY"), ob) is first

    def test_find_does_not_mutate_book(self) -> None:
        ob = OfferBook()
        ob.add(_offer("bob", "SELL"))
        find_match(_offer("alice", "BUY"), ob)
        assert len(ob) == 1


class TestSplitByDirection:
    def test_incoming_buy(self) -> None:
        buy, sell = _offer("alice", "BUY"), _offer("bob", "SELL")
        assert split_by_direction(buy, sell) == (buy, sell)

    def test_incoming_sell(self) -> None:
        buy, sell = _offer("alice", "BUY"), _offer("bob", "SELL")
        assert split_by_direction(sell, buy) == (buy, sell)
