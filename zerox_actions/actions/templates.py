GET_INDICATIVE_PRICE_TEMPLATE = """
Extract the details of the token swap the user wants a price for from the recent messages.

Recent messages:
{{recentMessages}}

Supported chains: {{supportedChains}}

Respond with a JSON object with the following fields:
- sellTokenSymbol: symbol of the token the user wants to sell, for example "ETH"
- sellAmount: amount of the sell token as a number, for example 2 or 0.5
- buyTokenSymbol: symbol of the token the user wants to buy, for example "USDC"
- chain: name of the chain, one of the supported chains

Use null for any field the user has not provided. Do not guess.

```json
{
    "sellTokenSymbol": "ETH",
    "sellAmount": 2,
    "buyTokenSymbol": "USDC",
    "chain": "base"
}
```
"""
