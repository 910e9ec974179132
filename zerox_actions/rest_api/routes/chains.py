from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path

from zerox_actions.models.chain import ChainModel, Chains, TokenModel
from zerox_actions.rest_api import dependencies

chains_route = APIRouter()


@chains_route.get('/', response_model=List[ChainModel])
@chains_route.get('', include_in_schema=False)
async def get_chains(
    token_registry: dependencies.TokenRegistry = Depends(dependencies.token_registry),
):
    """Returns the chains the token registry can resolve symbols on."""
    return [
        ChainModel.from_chain(chain)
        for chain in Chains
        if token_registry.is_chain_supported(chain)
    ]


@chains_route.get(
    '/{chain_id}/tokens',
    response_model=List[TokenModel],
    responses={404: {"description": "Chain ID not found"}},
)
async def get_tokens(
    chain_id: int = Path(..., description='Chain ID'),
    token_registry: dependencies.TokenRegistry = Depends(dependencies.token_registry),
):
    """Returns the tokens known for a given chain ID."""
    if not token_registry.is_chain_supported(chain_id):
        raise HTTPException(status_code=404, detail='Chain ID not found')
    await token_registry.initialize_chain(chain_id)
    return token_registry.get_tokens(chain_id)
