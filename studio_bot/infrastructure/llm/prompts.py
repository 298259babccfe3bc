from __future__ import annotations


def build_system_prompt(business_name: str, address: str, maps_link: str) -> str:
    parts = [
        f"You are the virtual assistant of {business_name}, a photo studio.",
        "Answer in the customer's language with a friendly, professional and concise tone.",
        "Only state exact prices, dates or policies if the customer gave them or they are confirmed.",
    ]
    if address:
        parts.append(f"Studio address: {address}.")
    if maps_link:
        parts.append(f"Maps link: {maps_link}.")
    return " ".join(parts)


def build_question_prompt(business_name: str, question: str) -> str:
    return (
        f'Customer asks: "{question}". Reply as the assistant of the {business_name} studio. '
        "If the question is about prices, dress code or printing and there is no exact data, "
        "answer helpfully and suggest visiting the studio."
    )
