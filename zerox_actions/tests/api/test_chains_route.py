def test_get_chains(api_client):
    response = api_client.get('v1/chains')
    assert response.status_code == 200
    response_data = response.json()
    assert len(response_data) == 10
    assert {'name': 'base', 'display_name': 'Base', 'chain_id': 8453} in response_data


def test_get_tokens_unknown_chain(api_client):
    response = api_client.get('v1/chains/1287/tokens')
    assert response.status_code == 404
    assert response.json() == {'detail': 'Chain ID not found'}


def test_get_tokens(api_client):
    response = api_client.get('v1/chains/8453/tokens')
    assert response.status_code == 200
    symbols = [token['symbol'] for token in response.json()]
    assert symbols == ['ETH', 'USDC', 'WETH', 'DAI']


def test_health_check(api_client):
    response = api_client.get('health_check')
    assert response.status_code == 200
    assert response.text == 'OK'


def test_request_id_is_echoed(api_client):
    response = api_client.get('v1/chains', headers={'x-request-id': 'abc123'})
    assert response.headers['x-request-id'] == 'abc123'
    assert api_client.get('v1/chains').headers['x-request-id']
