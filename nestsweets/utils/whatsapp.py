"""WhatsApp click-to-chat links."""

from urllib.parse import quote
from .pricing import format_whatsapp_number, get_currency_symbol


def whatsapp_url(phone, message):
    return f'https://wa.me/{format_whatsapp_number(phone)}?text={quote(message)}'


def order_message(order, currency='INR'):
    """Order summary sent to the store over WhatsApp."""
    symbol = get_currency_symbol(currency)
    items = '\n'.join(
        f'{index}. {item.cake_name} ({item.weight or "-"}) x{item.quantity} - '
        f'{symbol}{item.total_price:.2f}'
        for index, item in enumerate(order.items, start=1)
    )
    lines = [
        '🎂 *NEW ORDER - NestSweets*',
        '',
        f'*Order ID:* {order.order_ref}',
        f'*Customer:* {order.customer_name}',
        f'*Phone:* {order.customer_phone}',
    ]
    if order.customer_email:
        lines.append(f'*Email:* {order.customer_email}')
    lines += [
        f'*Address:* {order.delivery_address or ""}',
        f'*Pincode:* {order.delivery_pincode or ""}',
        '',
        f'*Delivery:* {order.delivery_date.strftime("%d/%m/%Y") if order.delivery_date else "-"}',
        f'*Time:* {order.delivery_slot_label or "-"}',
        '',
        '*Items:*',
        items,
        '',
        f'*Total:* {symbol}{order.total:.2f}',
        f'*Payment:* {(order.payment_method or "cod").upper()}',
    ]
    if order.special_instructions:
        lines += ['', f'*Notes:* {order.special_instructions}']
    return '\n'.join(lines)



def cart_message(lines, totals, currency='INR'):
    """Cart contents sent to the store when ordering over WhatsApp."""
    symbol = get_currency_symbol(currency)
    items = []
    for index, line in enumerate(lines, start=1):
        details = ', '.join(part for part in (line.weight, line.flavor) if part)
        item = f'{index}. {line.name}' + (f' ({details})' if details else '')
        item += f' x{line.quantity} - {symbol}{line.subtotal:.2f}'
        if line.customization:
            item += f'\n   Customization: {line.customization}'
        items.append(item)

    message = [
        '🎂 *NEW ORDER - NestSweets*',
        '',
        '*Items:*',
        '\n'.join(items),
        '',
        f'*Subtotal:* {symbol}{totals["subtotal"]:.2f}',
        f'*Delivery:* {symbol}{totals["delivery_fee"]:.2f}',
    ]
    if totals.get('tax'):
        message.append(f'*Tax:* {symbol}{totals["tax"]:.2f}')
    message.append(f'*Total:* {symbol}{totals["total"]:.2f}')
    return '\n'.join(message)


def custom_request_message(custom_request):
    lines = [
        '🎂 *CUSTOM CAKE REQUEST*',
        '',
        f'*Request ID:* {custom_request.request_ref}',
        f'*Name:* {custom_request.name}',
        f'*Phone:* {custom_request.phone}',
        f'*Occasion:* {custom_request.occasion}',
        f'*Flavor:* {custom_request.flavor}',
        f'*Size:* {custom_request.size}',
        f'*Budget:* {custom_request.budget}',
        f'*Delivery:* {custom_request.delivery_date.strftime("%d/%m/%Y")}',
        '',
        f'*Design:* {custom_request.design}',
    ]
    if custom_request.is_urgent:
        lines.insert(1, '⚡ URGENT')
    return '\n'.join(lines)
